"""
Required-field validation for /generate-prompt bodies.
"""

from typing import Any

from ..errors import ValidationError
from ..models.deal import REQUIRED_FIELDS, ValidationResult

# Code fields where 0 is a real value (Multifamily, Refinance, Permanent)
_ZERO_ALLOWED = frozenset({'assetType', 'loanType', 'loanTerm'})


def _is_missing(name: str, value: Any) -> bool:
    if value is None or value is False:
        return True
    if value is True:
        return False
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (int, float)):
        return value == 0 and name not in _ZERO_ALLOWED
    if isinstance(value, (list, dict, tuple)):
        return not value
    return False


def validate_deal(data: dict[str, Any]) -> ValidationResult:
    """
    Check that every required field is present and non-empty.

    Args:
        data: Decoded request body

    Returns:
        ValidationResult listing missing fields in declaration order
    """
    missing = [name for name in REQUIRED_FIELDS if _is_missing(name, data.get(name))]
    return ValidationResult(valid=not missing, missing_fields=missing)


def require_valid_deal(data: dict[str, Any]) -> None:
    """Raise ValidationError if any required field is missing."""
    result = validate_deal(data)
    if not result.valid:
        raise ValidationError(result.missing_fields)
