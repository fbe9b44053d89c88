"""Root logger setup for the API process: JSON lines, or plain text on a terminal."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Union

PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Replace the root handlers with a single stdout handler at ``level``.

    Unknown level names fall back to INFO.
    """
    numeric_level = _resolve_level(level)
    root = logging.getLogger()
    root.setLevel(numeric_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(PLAIN_FORMAT) if sys.stdout.isatty() else JSONFormatter())
    root.addHandler(handler)
    return root
