"""POST /generate-prompt: validate deal fields and render the prompt."""

import structlog
from fastapi import APIRouter, Request
from pydantic import ValidationError as PydanticValidationError

from deal_prompt.errors import (
    InvalidInputError,
    ValidationError,
    wrap_unexpected_error,
)
from deal_prompt.logging import RequestTimer
from deal_prompt.models.deal import DealInput
from deal_prompt.pipeline.formatter import format_prompt, mapped_values
from deal_prompt.pipeline.validator import require_valid_deal

from ..dependencies import error_response, get_labels, read_json_body

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/generate-prompt")
async def generate_prompt(request: Request):
    """Validate a deal body and return the prompt plus resolved labels."""
    timer = RequestTimer()

    try:
        with timer.stage("decode"):
            body = await read_json_body(request)
    except InvalidInputError as e:
        logger.warning("generate_prompt.invalid_body", error=e.summary(), **e.context)
        return error_response(e)

    try:
        with timer.stage("validate"):
            require_valid_deal(body)
    except ValidationError as e:
        logger.info("generate_prompt.missing_fields", missing_fields=e.missing_fields)
        return error_response(e)

    try:
        deal = DealInput.model_validate(body)
    except PydanticValidationError as e:
        error = InvalidInputError("Invalid deal fields", details=str(e))
        logger.info("generate_prompt.invalid_fields", error=error.details)
        return error_response(error)

    labels = get_labels(request)
    try:
        with timer.stage("format"):
            prompt = format_prompt(deal, labels)
            mapped = mapped_values(deal, labels)
    except Exception as e:
        error = wrap_unexpected_error(e, "Failed to generate prompt")
        logger.error(
            "generate_prompt.failed",
            error=error.details,
            error_type=error.context.get("error_type"),
        )
        return error_response(error)

    logger.info("generate_prompt.complete", mapped_values=mapped, **timer.summary())
    return {
        "success": True,
        "prompt": prompt,
        "mappedValues": mapped,
    }
