"""FastAPI application for the deal prompt service."""

from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request

from deal_prompt.config import config
from deal_prompt.labels import default_label_table, load_label_table
from deal_prompt.logging import configure_logging, logging_context

from .config import get_settings
from .routes.health import router as health_router
from .routes.parse import router as parse_router
from .routes.prompt import router as prompt_router

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the read-only label table once at startup."""
    settings = get_settings()
    logger.info("lifespan.startup", app_name=settings.APP_NAME, port=settings.PORT)

    if config.LABELS_PATH:
        labels = load_label_table(config.LABELS_PATH)
    else:
        labels = default_label_table()

    # Shared by every request, never mutated
    app.state.labels = labels

    logger.info("lifespan.ready", label_categories=labels.categories)
    yield

    logger.info("lifespan.shutdown")


app = FastAPI(
    title="deal-prompt-service",
    description="Renders deal prompts and parses lender research output",
    lifespan=lifespan,
)


@app.middleware("http")
async def bind_request_context(request: Request, call_next):
    """Tag every log line of a request with its request id and route."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    with logging_context(request_id=request_id, route=request.url.path):
        response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


app.include_router(health_router)
app.include_router(prompt_router)
app.include_router(parse_router)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
