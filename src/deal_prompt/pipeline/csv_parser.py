"""
Parser for ---delimited lender research output.

The upstream prompt chain returns one text blob with blocks separated by
"---": one or more CSV lender tables, a call script, and an email subject /
summary pair. The model's formatting drifts (code fences, JSON-wrapped
payloads, stray placeholder rows), so parsing is forgiving: unknown blocks
are ignored and malformed rows are dropped.

Example input:

    ```csv
    Company Name,Website,Reason for Fit
    Acme Capital,acme.com,Funds multifamily bridge loans, fast close
    ---
    Script
    Hi, this is Dana calling about a bridge loan...
    ---
    Email Subject,Deal Summary
    Bridge loan in Austin,$1.5M multifamily bridge
    ```
"""

import re

from ..body import loads_lenient
from ..errors import InvalidInputError, ParseError
from ..logging import get_logger
from ..models.lenders import EmailDetails, LenderRecord, ParsedBundle
from .sections import (
    CSV_HEADER,
    NO_LENDERS_PLACEHOLDER,
    SCRIPT_HEADER,
    SECTION_DELIMITER,
    BlockKind,
    classify_block,
)

logger = get_logger(__name__)

_FENCE_OPEN = re.compile(r'^```[ \t]*(?:csv)?[ \t]*\n?', re.IGNORECASE)
_FENCE_CLOSE = re.compile(r'\n?```\s*$')

# Guards against unbounded unwrapping of pathological payloads
_MAX_UNWRAP_DEPTH = 5


def unwrap_input(raw: str) -> str:
    """
    Unwrap a payload that is itself JSON-encoded.

    Handles a JSON string literal ("...") and an object carrying an
    inputString property, repeatedly for double-encoded payloads.

    Raises:
        ParseError: on malformed JSON or an object without inputString
    """
    text = raw
    for _ in range(_MAX_UNWRAP_DEPTH):
        stripped = text.strip()
        if not stripped or stripped[0] not in '{"':
            return text

        try:
            value = loads_lenient(stripped)
        except InvalidInputError as e:
            raise ParseError(
                'Failed to decode wrapped inputString',
                details=e.details,
                context=e.context,
            ) from e

        if isinstance(value, dict):
            if 'inputString' not in value:
                raise ParseError(
                    'Wrapped payload has no inputString',
                    context={'keys': sorted(value)},
                )
            value = value['inputString']

        if not isinstance(value, str):
            raise ParseError(
                'Wrapped inputString is not text',
                details=f"got {type(value).__name__}",
            )
        text = value
    return text


def strip_code_fence(text: str) -> str:
    """Remove a leading ```csv / ``` fence and a trailing ``` fence."""
    text = text.strip()
    text = _FENCE_OPEN.sub('', text, count=1)
    text = _FENCE_CLOSE.sub('', text, count=1)
    return text.strip()


def split_blocks(text: str) -> list[str]:
    """Split on the --- delimiter, dropping empty blocks."""
    blocks = (block.strip() for block in text.split(SECTION_DELIMITER))
    return [block for block in blocks if block]


def parse_lender_line(line: str) -> LenderRecord | None:
    """
    Parse one CSV lender row.

    The reason column is free text and may itself contain commas, so
    everything after the second comma belongs to it.
    """
    fields = line.split(',')
    if len(fields) < 3:
        return None

    company = fields[0].strip()
    if not company:
        return None

    return LenderRecord(
        company_name=company,
        website=fields[1].strip(),
        reason_for_fit=','.join(fields[2:]).strip(),
    )


def _is_lender_data_line(line: str) -> bool:
    return (
        ',' in line
        and line != CSV_HEADER
        and not line.lower().startswith(NO_LENDERS_PLACEHOLDER)
    )


def parse_lender_block(lines: list[str]) -> list[LenderRecord]:
    """Parse the rows under a CSV header into lender records."""
    records = []
    for line in lines[1:]:
        if not _is_lender_data_line(line):
            continue
        record = parse_lender_line(line)
        if record is not None:
            records.append(record)
    return records


def parse_script_block(lines: list[str]) -> str:
    """Join the script lines (minus the header) with single spaces."""
    return ' '.join(line for line in lines if line != SCRIPT_HEADER)


def parse_email_block(lines: list[str]) -> EmailDetails | None:
    """Split the first row under the email header into subject and summary."""
    if len(lines) < 2:
        return None
    subject, _, summary = lines[1].partition(',')
    return EmailDetails(subject=subject.strip(), summary=summary.strip())


def parse_csv_data(raw: str) -> ParsedBundle:
    """
    Parse a lender research text blob.

    Args:
        raw: Text as posted in inputString

    Returns:
        ParsedBundle with one lender group per non-empty CSV block, the last
        script block, and the last email block

    Raises:
        ParseError: if a JSON-wrapped payload cannot be decoded
    """
    text = strip_code_fence(unwrap_input(raw))
    text = text.replace('\r\n', '\n').replace('\r', '\n')

    bundle = ParsedBundle()
    skipped = 0

    for block in split_blocks(text):
        lines = [line.strip() for line in block.split('\n')]
        lines = [line for line in lines if line]
        if not lines:
            continue

        kind = classify_block(lines[0])
        if kind is BlockKind.CSV:
            records = parse_lender_block(lines)
            if records:
                bundle.lender_lists.append(records)
        elif kind is BlockKind.SCRIPT:
            bundle.script = parse_script_block(lines)
        elif kind is BlockKind.EMAIL:
            details = parse_email_block(lines)
            if details is not None:
                bundle.email_details = details
        else:
            skipped += 1

    logger.debug(
        'parse_csv.blocks_parsed',
        lender_groups=len(bundle.lender_lists),
        has_script=bundle.script is not None,
        has_email=bundle.email_details is not None,
        skipped_blocks=skipped,
    )
    return bundle
