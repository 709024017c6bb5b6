"""
structlog setup for the custom resource provider.

Log lines are rendered as JSON for CloudWatch (LOG_JSON=true) or for the
console otherwise. While a request is handled its CloudFormation identifiers
are bound with `request_log_context`, so every line logged during the cycle
names the request, stack and logical resource it belongs to.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator

import structlog
from structlog.types import Processor

from .config import get_settings
from .models import CustomResourceRequest


def configure_logging(json_output: bool = False, log_level: str | None = None) -> None:
    """
    Configure structlog.

    Args:
        json_output: Render JSON lines instead of console output
        log_level: Minimum level; defaults to the LOG_LEVEL setting
    """
    level = getattr(logging, (log_level or get_settings().LOG_LEVEL).upper(), logging.INFO)

    renderer: list[Processor]
    if json_output:
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer(default=str)]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt='iso'),
            *renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def request_log_context(request: CustomResourceRequest) -> Iterator[None]:
    """Bind the identifiers of `request` to every log line in the block."""
    identifiers = {
        'request_id': request.request_id,
        'stack_id': request.stack_id,
        'logical_resource_id': request.logical_resource_id,
    }
    # a malformed request may lack some of them
    with structlog.contextvars.bound_contextvars(**{k: v for k, v in identifiers.items() if v}):
        yield


class StageTimer:
    """Milliseconds spent in each stage of a request cycle."""

    def __init__(self):
        self._started = time.perf_counter()
        self.stages: dict[str, float] = {}

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        started = time.perf_counter()
        try:
            yield
        finally:
            self.stages[name] = _elapsed_ms(started)

    def summary(self) -> dict[str, Any]:
        """Log fields: `total_ms` plus `<stage>_ms` for every stage run."""
        fields = {f'{name}_ms': ms for name, ms in self.stages.items()}
        fields['total_ms'] = _elapsed_ms(self._started)
        return fields


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


configure_logging(json_output=get_settings().LOG_JSON)
