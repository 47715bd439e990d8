"""Shared request helpers for route handlers."""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from deal_prompt.body import decode_json_body
from deal_prompt.errors import DealPromptError
from deal_prompt.labels import DEFAULT_LABELS, LabelTable


async def read_json_body(request: Request) -> dict[str, Any]:
    """Read and leniently decode the raw request body."""
    return decode_json_body(await request.body())


def get_labels(request: Request) -> LabelTable:
    """Label table loaded at startup (built-in defaults if lifespan did not run)."""
    return getattr(request.app.state, "labels", None) or DEFAULT_LABELS


def error_response(error: DealPromptError) -> JSONResponse:
    """Render a typed error as its JSON body and status code."""
    return JSONResponse(status_code=error.status_code, content=error.to_dict())
