"""
Parser for tokenized spreadsheet pastes.

The research sheet is exported as an array of rows, each an array of cell
strings. Marker rows open a section ("Institutions that can do the deal",
"Voicemail Script", ...), header rows repeat column titles, and every other
row is data for the section most recently opened.
"""

from typing import Any

from ..body import loads_lenient
from ..errors import ParseError
from ..logging import get_logger
from ..models.lenders import EmailDetails, LenderRecord, PasteBundle
from .sections import SectionState, is_header_cell, next_section, section_marker

logger = get_logger(__name__)


def _cell_text(value: Any) -> str:
    if value is None:
        return ''
    return str(value).strip()


def normalize_row(row: Any) -> list[str]:
    """Coerce a row into a list of trimmed cell strings."""
    if isinstance(row, (list, tuple)):
        return [_cell_text(cell) for cell in row]
    return [_cell_text(row)]


def _lender_from_cells(cells: list[str]) -> LenderRecord | None:
    if len(cells) < 3:
        return None
    company, website, reason = cells[0], cells[1], cells[2]
    if not (company and website and reason):
        return None
    return LenderRecord(company_name=company, website=website, reason_for_fit=reason)


def _lender_list(bundle: PasteBundle, state: SectionState) -> list[LenderRecord]:
    if state is SectionState.SIMILAR_DEALS:
        return bundle.similar_deals_lenders
    if state is SectionState.CAPABLE:
        return bundle.capable_lenders
    return bundle.local_lenders


def parse_paste_data(rows: Any) -> PasteBundle:
    """
    Parse an array of rows into categorised lender lists, script and email.

    Rows seen before any section marker, header rows and empty rows are
    skipped. In the voicemail section the last data row wins.

    Raises:
        ParseError: if rows is not an array
    """
    if not isinstance(rows, list):
        raise ParseError(
            'Paste data must be an array of rows',
            details=f"got {type(rows).__name__}",
        )

    bundle = PasteBundle()
    state = SectionState.NONE

    for raw_row in rows:
        cells = normalize_row(raw_row)
        if not cells or not any(cells):
            continue

        first = cells[0]
        if section_marker(first) is not None:
            state = next_section(state, first)
            continue
        if is_header_cell(first) or state is SectionState.NONE:
            continue

        if state.is_lender_section:
            record = _lender_from_cells(cells)
            if record is not None:
                _lender_list(bundle, state).append(record)
        elif state is SectionState.VOICEMAIL:
            if first and 'Script' not in first:
                bundle.voicemail_script = first
        elif state is SectionState.EMAIL:
            if len(cells) >= 2 and cells[0] and cells[1]:
                bundle.email_details = EmailDetails(subject=cells[0], summary=cells[1])

    logger.debug(
        'parse_paste.rows_parsed',
        rows=len(rows),
        similar_deals=len(bundle.similar_deals_lenders),
        capable=len(bundle.capable_lenders),
        local=len(bundle.local_lenders),
        has_voicemail=bundle.voicemail_script is not None,
        has_email=bundle.email_details is not None,
    )
    return bundle


def parse_paste_text(text: str) -> PasteBundle:
    """
    Decode JSON array-of-rows text and parse it.

    Raises:
        InvalidInputError: on malformed JSON
        ParseError: if the decoded value is not an array
    """
    return parse_paste_data(loads_lenient(text))
