"""
Section vocabularies and transition functions for the record parsers.

Both parsers decide which logical section a line belongs to from sentinel
strings only. The transitions here are pure so they can be tested without
running a parser loop.
"""

from enum import Enum

# Text-blob sentinels
SECTION_DELIMITER = '---'
CSV_HEADER = 'Company Name,Website,Reason for Fit'
SCRIPT_HEADER = 'Script'
EMAIL_HEADER = 'Email Subject,Deal Summary'
NO_LENDERS_PLACEHOLDER = 'no specific lenders'

# Tokenized-paste sentinels (matched case-insensitively as substrings)
SIMILAR_DEALS_MARKER = 'institutions that have done similar deals'
CAPABLE_MARKER = 'institutions that can do the deal'
LOCAL_MARKER = 'institutions within a 20km radius'
# Matched exactly (after trimming)
VOICEMAIL_MARKER = 'Voicemail Script'
EMAIL_MARKER = 'Deal Summary for Email'
HEADER_CELLS = frozenset({'Company Name', 'Script', 'Email Subject'})


class BlockKind(str, Enum):
    """Kind of a ---delimited block in a text blob."""

    NONE = 'none'
    CSV = 'csv'
    SCRIPT = 'script'
    EMAIL = 'email'


class SectionState(str, Enum):
    """Section the current row of a tokenized paste belongs to."""

    NONE = 'none'
    SIMILAR_DEALS = 'similar_deals'
    CAPABLE = 'capable'
    LOCAL = 'local'
    VOICEMAIL = 'voicemail'
    EMAIL = 'email'

    @property
    def is_lender_section(self) -> bool:
        return self in _LENDER_SECTIONS


_LENDER_SECTIONS = frozenset(
    {SectionState.SIMILAR_DEALS, SectionState.CAPABLE, SectionState.LOCAL}
)

_MARKERS: tuple[tuple[str, SectionState], ...] = (
    (SIMILAR_DEALS_MARKER, SectionState.SIMILAR_DEALS),
    (CAPABLE_MARKER, SectionState.CAPABLE),
    (LOCAL_MARKER, SectionState.LOCAL),
)


def classify_block(first_line: str) -> BlockKind:
    """Classify a text block by its first non-empty line."""
    line = first_line.strip()
    if line.startswith(CSV_HEADER):
        return BlockKind.CSV
    if line.startswith(EMAIL_HEADER):
        return BlockKind.EMAIL
    if line.startswith(SCRIPT_HEADER):
        return BlockKind.SCRIPT
    return BlockKind.NONE


def section_marker(cell: str) -> SectionState | None:
    """Return the section a marker cell opens, or None if it is not a marker."""
    text = cell.strip()
    if text == VOICEMAIL_MARKER:
        return SectionState.VOICEMAIL
    if text == EMAIL_MARKER:
        return SectionState.EMAIL

    lowered = text.lower()
    for marker, state in _MARKERS:
        if marker in lowered:
            return state
    return None


def next_section(state: SectionState, first_cell: str) -> SectionState:
    """Transition on a row's first cell; non-marker cells keep the current state."""
    return section_marker(first_cell) or state


def is_header_cell(cell: str) -> bool:
    """True for the column-header rows repeated under each section marker."""
    return cell.strip() in HEADER_CELLS
