"""Process-wide logging setup.

Log lines look like::

    2024-06-15 09:30:00,123 | INFO | finzen.storage.stores | Transaction added | {"category": "ocio"}

Anything passed through ``extra=`` is appended to the line as a JSON object.
"""
import json
import logging
from typing import Any, Dict, Optional
from finzen.config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the ``extra=`` fields attached to a record."""
    return {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}


class FinZenFormatter(logging.Formatter):
    """Formatter that appends a record's extra fields as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = record_extras(record)
        if not extras:
            return line
        return f"{line} | {json.dumps(extras, default=str, ensure_ascii=False)}"


def configure_logging(config: Optional[Settings] = None, force: bool = False) -> None:
    """
    Install a stream handler with FinZenFormatter on the root logger.

    Args:
        config: Settings to read ``log_level`` from; the module-level settings by default
        force: Replace handlers that are already installed (uvicorn or pytest may add their own)
    """
    config = config or default_settings
    root = logging.getLogger()
    if root.handlers and not force:
        return
    logging.basicConfig(level=config.log_level.upper(), format=LOG_FORMAT, force=force)
    for handler in root.handlers:
        handler.setFormatter(FinZenFormatter(LOG_FORMAT))
