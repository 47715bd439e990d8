"""
Tolerant JSON decoding for request bodies.

The automation tools that call this service paste multi-line LLM output
straight into JSON string values, so bodies often contain raw newlines and
tabs inside strings. Decoding tries strict JSON first and retries once with
those control characters escaped.
"""

import json
from typing import Any

from .errors import InvalidInputError
from .logging import get_logger, truncate_for_log

logger = get_logger(__name__)


def escape_control_characters(text: str) -> str:
    """Escape literal newlines, carriage returns and tabs."""
    return text.replace('\n', '\\n').replace('\r', '\\r').replace('\t', '\\t')


def loads_lenient(text: str) -> Any:
    """
    Decode JSON text, retrying with control characters escaped.

    Raises:
        InvalidInputError: if both attempts fail. details carries both error
            messages; context carries a truncated copy of the original text.
    """
    try:
        return json.loads(text)
    except ValueError as original:
        cleaned = escape_control_characters(text)
        if cleaned == text:
            raise InvalidInputError(
                'Invalid JSON',
                details=str(original),
                context={
                    'original_error': str(original),
                    'raw': truncate_for_log(text),
                },
            ) from original
        try:
            value = json.loads(cleaned)
        except ValueError as retry:
            raise InvalidInputError(
                'Invalid JSON',
                details=f"{original} (after escaping control characters: {retry})",
                context={
                    'original_error': str(original),
                    'cleanup_error': str(retry),
                    'raw': truncate_for_log(text),
                },
            ) from retry

    logger.debug('body.decoded_after_cleanup', chars=len(text))
    return value


def decode_json_body(raw: bytes | str) -> dict[str, Any]:
    """
    Decode a request body into a dict.

    An empty body decodes to {}. Top-level string values are trimmed.

    Raises:
        InvalidInputError: on undecodable bytes, malformed JSON, or a
            non-object top-level value
    """
    if isinstance(raw, bytes):
        try:
            text = raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidInputError('Invalid JSON', details=str(e)) from e
    else:
        text = raw

    if not text.strip():
        return {}

    body = loads_lenient(text)
    if not isinstance(body, dict):
        raise InvalidInputError(
            'Invalid JSON',
            details=f"Expected a JSON object, got {type(body).__name__}",
        )

    return {key: value.strip() if isinstance(value, str) else value for key, value in body.items()}
