"""POST /parse-csv-data and /parse-paste-data: section-delimited parsing."""

from typing import Any

import structlog
from fastapi import APIRouter, Request

from deal_prompt.errors import InvalidInputError, wrap_unexpected_error
from deal_prompt.logging import RequestTimer
from deal_prompt.pipeline.csv_parser import parse_csv_data
from deal_prompt.pipeline.paste_parser import parse_paste_data, parse_paste_text

from ..dependencies import error_response, read_json_body

logger = structlog.get_logger(__name__)

router = APIRouter()


def _input_string(body: dict[str, Any]) -> Any:
    value = body.get("inputString")
    if value is None or (isinstance(value, str) and not value):
        raise InvalidInputError("Missing inputString")
    return value


@router.post("/parse-csv-data")
async def parse_csv(request: Request):
    """Parse a ---delimited lender research blob."""
    timer = RequestTimer()

    try:
        with timer.stage("decode"):
            body = await read_json_body(request)
            raw = _input_string(body)
        if not isinstance(raw, str):
            raise InvalidInputError(
                "inputString must be a string",
                details=f"got {type(raw).__name__}",
            )
    except InvalidInputError as e:
        logger.warning("parse_csv.invalid_body", error=e.summary(), **e.context)
        return error_response(e)

    log = logger.bind(input_chars=len(raw))
    log.info("parse_csv.received")

    try:
        with timer.stage("parse"):
            bundle = parse_csv_data(raw)
    except Exception as e:
        error = wrap_unexpected_error(e, "Failed to parse CSV data")
        log.error("parse_csv.failed", error=error.details, **error.context)
        return error_response(error)

    log.info(
        "parse_csv.complete",
        lender_groups=len(bundle.lender_lists),
        **timer.summary(),
    )
    return {"success": True, "data": bundle.to_dict()}


@router.post("/parse-paste-data")
async def parse_paste(request: Request):
    """Parse a JSON array-of-rows spreadsheet paste."""
    timer = RequestTimer()

    try:
        with timer.stage("decode"):
            body = await read_json_body(request)
            raw = _input_string(body)
    except InvalidInputError as e:
        logger.warning("parse_paste.invalid_body", error=e.summary(), **e.context)
        return error_response(e)

    try:
        with timer.stage("parse"):
            if isinstance(raw, str):
                bundle = parse_paste_text(raw)
            else:
                bundle = parse_paste_data(raw)
    except Exception as e:
        error = wrap_unexpected_error(e, "Failed to parse paste data")
        if error.status_code < 500:
            logger.warning("parse_paste.invalid_json", error=error.summary(), **error.context)
        else:
            logger.error("parse_paste.failed", error=error.details, **error.context)
        return error_response(error)

    logger.info(
        "parse_paste.complete",
        similar_deals=len(bundle.similar_deals_lenders),
        capable=len(bundle.capable_lenders),
        local=len(bundle.local_lenders),
        **timer.summary(),
    )
    return {"success": True, "data": bundle.to_dict()}
