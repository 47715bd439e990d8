"""
structlog setup for the Deal Prompt service.

Every request runs inside logging_context(), bound by the HTTP middleware,
so log lines from the routes, parsers and label loader all carry the same
request_id and route. Production sets LOG_JSON=true for one JSON object per
line; local runs get the colored console renderer.
"""

import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Generator

import structlog
from structlog.types import Processor

from .config import config

_request_id: ContextVar[str | None] = ContextVar('request_id', default=None)
_route: ContextVar[str | None] = ContextVar('route', default=None)


def get_request_id() -> str | None:
    return _request_id.get()


def get_route() -> str | None:
    return _route.get()


def add_request_info(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor stamping request_id and route onto each event."""
    request_id = get_request_id()
    route = get_route()

    if request_id:
        event_dict['request_id'] = request_id
    if route:
        event_dict['route'] = route

    return event_dict


def configure_logging(
    json_output: bool | None = None,
    log_level: str | None = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        json_output: JSON lines when True, console rendering when False.
                    Defaults to config.LOG_JSON.
        log_level: Defaults to config.LOG_LEVEL
    """
    if json_output is None:
        json_output = config.LOG_JSON
    level = log_level or config.LOG_LEVEL
    level_num = getattr(logging, level.upper(), logging.INFO)

    # uvicorn's access and error logs go through the stdlib root logger
    logging.basicConfig(
        format='%(message)s',
        stream=sys.stdout,
        level=level_num,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_request_info,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt='iso'),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def logging_context(
    request_id: str | None = None,
    route: str | None = None,
) -> Generator[None, None, None]:
    """
    Bind request_id / route for the duration of a request.

    Values left as None keep whatever an enclosing context set; the previous
    values are restored on exit.
    """
    old_request_id = _request_id.get()
    old_route = _route.get()

    try:
        if request_id is not None:
            _request_id.set(request_id)
        if route is not None:
            _route.set(route)
        yield
    finally:
        _request_id.set(old_request_id)
        _route.set(old_route)


def truncate_for_log(text: str, limit: int | None = None) -> str:
    """Shorten raw request text before it goes into a log line."""
    limit = config.MAX_LOGGED_BODY_CHARS if limit is None else limit
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text)} chars)"


class RequestTimer:
    """
    Per-stage durations for one request (decode, validate, format, parse).

    Routes splat summary() into their *.complete log event.
    """

    def __init__(self):
        self.stages: dict[str, float] = {}
        self.start_time: float = time.perf_counter()

    @contextmanager
    def stage(self, name: str) -> Generator[None, None, None]:
        stage_start = time.perf_counter()
        try:
            yield
        finally:
            self.stages[name] = (time.perf_counter() - stage_start) * 1000

    def summary(self) -> dict[str, Any]:
        total_ms = (time.perf_counter() - self.start_time) * 1000
        return {
            'total_ms': round(total_ms, 2),
            'stages': {k: round(v, 2) for k, v in self.stages.items()},
        }


# Environment defaults until run() reconfigures at startup
configure_logging()
