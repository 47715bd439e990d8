"""
Label tables for categorical deal attributes.

Deal intake forms submit asset type, loan type and loan term as small integer
codes (exported from the CRM's tag configuration). LabelTable maps those codes
to the display strings used in prompts. Tables are read-only once built; the
API builds one at startup and shares it across requests.
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .errors import ConfigurationError
from .logging import get_logger

logger = get_logger(__name__)

UNKNOWN_LABEL = 'Unknown'

CATEGORIES = ('assetType', 'loanType', 'loanTerm')

DEFAULT_ASSET_TYPES: dict[str, str] = {
    '0': 'Multifamily',
    '1': 'Retail',
    '2': 'Industrial',
    '3': 'Office',
    '4': 'Owner Occupied',
    '5': 'Land',
    '6': 'Mixed Use',
    '7': 'Hospitality',
    '8': 'Cannabis',
    '9': 'Self storage',
    '10': 'RV Parks / Mobile Homes',
    '11': 'Assisted Living Facilities',
    '12': 'Healthcare',
    '13': 'Gas Stations',
    '14': 'Car wash',
    '15': 'Religious venues',
    '16': 'Golf Courses',
    '17': 'Medical Office',
    '18': 'Camping Grounds',
    '19': 'Retail + Office',
    '20': 'Multifamily + Retail',
    '21': 'Hospitality + Multifamily',
    '22': 'Retail + Industrial',
    '23': 'Residential Complex',
    '24': 'Marine Services Facility',
    '25': 'no result',
    '26': 'School',
    '27': 'AIRBNB',
    '28': 'Daycare',
    '29': 'Hotel',
    '30': 'Logistic Centre',
    '31': 'business acquisition',
    '32': 'Towing service',
    '33': 'Commercial trucking facility',
    '34': 'Community center',
    '35': 'Autobody Repair',
    '36': 'Not a CRE deal',
    '37': 'Rehab center',
    '38': 'Event Venue',
    '39': 'Sports complex',
    '40': 'Shoping centre',
    '41': 'Agricultural Land',
    '42': 'Pickleball Facility',
    '43': 'Single Residential',
    '44': 'Dog Grooming',
    '45': 'Tourism attraction',
    '46': 'Residential deal not supported',
    '47': 'Residential',
    '48': 'Recreational Facility',
    '49': 'Mining side',
    '50': 'Power Plant',
    '51': 'Waste Disposal Plant',
    '52': 'Auto Body Shop',
    '53': 'Wedding Venue',
    '54': 'Residential Development',
}

DEFAULT_LOAN_TYPES: dict[str, str] = {
    '0': 'Refinance',
    '1': 'Purchase',
    '2': 'Construction',
}

DEFAULT_LOAN_TERMS: dict[str, str] = {
    '0': 'Permanent',
    '1': 'Bridge',
}


def normalize_code(code: Any) -> str | None:
    """
    Turn a submitted code into a table key.

    Ints and integral floats become their decimal string, strings are
    trimmed. Booleans and anything else have no key.
    """
    if isinstance(code, bool):
        return None
    if isinstance(code, int):
        return str(code)
    if isinstance(code, float):
        return str(int(code)) if code.is_integer() else None
    if isinstance(code, str):
        return code.strip()
    return None


class LabelTable:
    """Immutable category -> code -> label mapping."""

    def __init__(self, tables: Mapping[str, Mapping[str, str]]):
        self._tables: Mapping[str, Mapping[str, str]] = MappingProxyType(
            {
                category: MappingProxyType({str(k): str(v) for k, v in table.items()})
                for category, table in tables.items()
            }
        )

    @property
    def categories(self) -> list[str]:
        return list(self._tables)

    def table(self, category: str) -> Mapping[str, str]:
        """Read-only view of one category (empty if unknown)."""
        return self._tables.get(category, MappingProxyType({}))

    def lookup(self, category: str, code: Any) -> str:
        """Return the display label, or "Unknown" for any unmapped input."""
        key = normalize_code(code)
        if key is None:
            return UNKNOWN_LABEL
        return self.table(category).get(key) or UNKNOWN_LABEL


def default_label_table() -> LabelTable:
    """Build the label table shipped with the service."""
    return LabelTable(
        {
            'assetType': DEFAULT_ASSET_TYPES,
            'loanType': DEFAULT_LOAN_TYPES,
            'loanTerm': DEFAULT_LOAN_TERMS,
        }
    )


DEFAULT_LABELS = default_label_table()


def lookup(category: str, code: Any, labels: LabelTable | None = None) -> str:
    """Module-level lookup against the given table (defaults to the built-in one)."""
    return (labels or DEFAULT_LABELS).lookup(category, code)


def load_label_table(path: str | Path) -> LabelTable:
    """
    Load a label table from a JSON file shaped {category: {code: label}}.

    Categories absent from the file keep their default tables.

    Raises:
        ConfigurationError: if the file is unreadable or not shaped correctly
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding='utf-8'))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            'Failed to load label table',
            details=str(e),
            context={'path': str(path)},
        ) from e

    if not isinstance(raw, dict):
        raise ConfigurationError(
            'Label table must be a JSON object',
            context={'path': str(path)},
        )

    tables: dict[str, Mapping[str, str]] = {
        category: DEFAULT_LABELS.table(category) for category in CATEGORIES
    }
    for category, table in raw.items():
        if not isinstance(table, dict):
            raise ConfigurationError(
                f"Label category '{category}' must map codes to labels",
                context={'path': str(path)},
            )
        tables[category] = table

    logger.info(
        'labels.loaded',
        path=str(path),
        categories=sorted(tables),
    )
    return LabelTable(tables)
