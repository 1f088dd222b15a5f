"""Logging setup shared by the command line and the server."""

from __future__ import annotations

import logging
import sys

from guidetiles.config import GUIDETILES_LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_CONTEXT_FIELDS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class ContextFormatter(logging.Formatter):
    """Append values passed through ``extra=`` to the log line."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = {key: value for key, value in record.__dict__.items() if key not in _CONTEXT_FIELDS}
        if not context:
            return message
        rendered = " ".join(f"{key}={value!r}" for key, value in sorted(context.items()))
        return f"{message} [{rendered}]"


def configure_logging(level: str | int = GUIDETILES_LOG_LEVEL) -> None:
    """Install a single stderr handler on the root logger."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_guidetiles", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ContextFormatter(_FORMAT))
    handler._guidetiles = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)
