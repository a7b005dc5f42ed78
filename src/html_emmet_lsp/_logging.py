"""Colored logging configuration for html-emmet-lsp."""

from __future__ import annotations

import logging
import sys
from typing import ClassVar

_PACKAGE_PREFIX = "html_emmet_lsp."


def _short_module_name(name: str) -> str:
    """Strip the package prefix so log lines stay compact."""
    if name.startswith(_PACKAGE_PREFIX):
        return name[len(_PACKAGE_PREFIX) :]
    if name == "html_emmet_lsp":
        return "HTMLEmmetLSP"
    return name


class PlainFormatter(logging.Formatter):
    """Formats log messages as ``[L YYYY-MM-DD HH:MM:SS.mmm component] message``."""

    LEVEL_CODES: ClassVar[dict[str, str]] = {
        "DEBUG": "D",
        "INFO": "I",
        "WARNING": "W",
        "ERROR": "E",
        "CRITICAL": "C",
    }

    def _prefix(self, record: logging.LogRecord) -> str:
        level_code = self.LEVEL_CODES.get(record.levelname, record.levelname[0])
        ct = self.converter(record.created)
        timestamp = f"{ct.tm_year:04d}-{ct.tm_mon:02d}-{ct.tm_mday:02d} {ct.tm_hour:02d}:{ct.tm_min:02d}:{ct.tm_sec:02d}.{int(record.msecs):03d}"
        component = getattr(record, "component", None) or _short_module_name(record.name)
        return f"[{level_code} {timestamp} {component}]"

    def format(self, record: logging.LogRecord) -> str:
        message = f"{self._prefix(record)} {record.getMessage()}"
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message


class ColoredFormatter(PlainFormatter):
    """Same layout as :class:`PlainFormatter`, with the prefix colored by level."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET: ClassVar[str] = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        message = f"{color}{self._prefix(record)}{self.RESET} {record.getMessage()}"
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message


class _ComponentAdapter(logging.LoggerAdapter):
    """Attach a fixed component label to every record."""

    def process(self, msg, kwargs):
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("component", self.extra["component"])
        return msg, kwargs


def get_logger(name: str, component: str | None = None) -> logging.Logger | logging.LoggerAdapter:
    """Return the module logger, optionally labelled with a short component name."""
    logger = logging.getLogger(name)
    if component is None:
        return logger
    return _ComponentAdapter(logger, {"component": component})


def setup_colored_logging(level: int = logging.INFO) -> None:
    """Configure colored logging on stderr.

    stdout carries the protocol stream, so log output must never go there.

    Args:
        level: The logging level to use (e.g., logging.INFO, logging.DEBUG)
    """
    supports_color = hasattr(sys.stderr, "isatty") and sys.stderr.isatty()
    formatter = ColoredFormatter() if supports_color else PlainFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
