from __future__ import annotations

import logging
from typing import Protocol

from dm_dashboard.application.exceptions import FetchError

logger = logging.getLogger(__name__)


class ErrorReporter(Protocol):
    """Surfaces a transient, non-blocking error notice to the user."""

    def report(self, error: FetchError) -> None: ...


class LoggingErrorReporter:
    """Fallback reporter used when no presentation is attached."""

    def report(self, error: FetchError) -> None:
        logger.warning("Fetch failed (stream=%s): %s", error.stream, error.detail)
