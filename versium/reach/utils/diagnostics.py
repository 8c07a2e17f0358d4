"""Forwarding of human-readable diagnostics to a user-supplied sink."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class DiagnosticSink:
    """Routes diagnostic messages to an optional logging function.

    The logging function receives the messages as separate positional
    arguments, the way ``print`` does. Messages are mirrored to this
    module's logger at DEBUG level, so an application with no
    sink and no logging configuration sees nothing.
    """

    def __init__(
        self,
        logging_function: Callable[..., Any] | None = None,
        *,
        verbose: bool = False,
    ) -> None:
        self._fn = logging_function
        self.verbose = verbose

    @property
    def enabled(self) -> bool:
        return self._fn is not None

    def log(self, *msgs: Any) -> None:
        """Emit a diagnostic (retries, failures, empty input)."""
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(" ".join(str(m) for m in msgs))
        if self._fn is not None:
            self._fn(*msgs)

    def verbose_log(self, *msgs: Any) -> None:
        """Emit a progress message, only when verbose output is on."""
        if self.verbose:
            self.log(*msgs)
