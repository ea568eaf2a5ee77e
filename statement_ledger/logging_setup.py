"""Centralized logging configuration for the ``statement_ledger`` package.

- ``configure_logging(...)``: attach a single ``StreamHandler`` to the package
  root logger (``"statement_ledger"``). Called once by entrypoints (the CLI).
- ``get_logger(name)``: acquire a logger, making sure the package root logger
  carries at least a ``NullHandler`` so library use stays silent.

Parsing modules never attach handlers of their own; they call
``get_logger("statement_ledger.<module>")`` and nothing else.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "statement_ledger"
_LEVEL_ENV_VAR = "STATEMENT_LEDGER_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _parse_level(level: str | None) -> int:
    name = (level or os.getenv(_LEVEL_ENV_VAR) or "").strip().upper()
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def configure_logging(
    level: str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Configure the package root logger exactly once.

    Parameters
    ----------
    level:
        Level name such as ``"DEBUG"``. When ``None`` the
        ``STATEMENT_LEDGER_LOG_LEVEL`` environment variable is consulted,
        falling back to ``logging.INFO``.
    fmt:
        Optional format string; defaults to
        ``"%(asctime)s %(name)s %(levelname)s %(message)s"``.
    stream:
        Output stream for the handler (``sys.stderr`` by default).
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # Avoid double emission via the root logger.
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name with a ``NullHandler`` fallback on the package root."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
