"""Diagnostic sink implementations."""

from __future__ import annotations

import logging


class NullSink:
    """Discard every notice."""

    def notice(self, message: str) -> None:
        del message


class LoggingSink:
    """Forward notices to a stdlib logger.

    Parameters
    ----------
    logger : logging.Logger | None, default=None
        Target logger. Defaults to the ``plain_codec`` logger.
    level : int, default=logging.WARNING
        Level used for every notice.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        level: int = logging.WARNING,
    ) -> None:
        self.logger = logger or logging.getLogger("plain_codec")
        self.level = level

    def notice(self, message: str) -> None:
        self.logger.log(self.level, message)
