"""Logger setup writing to stdout and a log file."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

DEBUG_LOG_FILE = "./log/wavely.log"
PRODUCTION_LOG_FILE = "/app/logs/wavely.log"


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps({
            "level": record.levelname.lower(),
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "caller": f"{record.filename}:{record.lineno}",
            "msg": record.getMessage(),
        })


def init_logger(debug: bool = False, log_file: str | None = None) -> logging.Logger:
    """Configure the ``wavely`` logger; raises OSError if the log file cannot be opened."""
    if debug:
        formatter = logging.Formatter(
            "%(asctime)s\t%(levelname)s\t%(filename)s:%(lineno)d\t%(message)s")
    else:
        formatter = _JsonFormatter()
    file_handler = logging.FileHandler(
        log_file or (DEBUG_LOG_FILE if debug else PRODUCTION_LOG_FILE), encoding="utf-8")

    log = logging.getLogger("wavely")
    for old in list(log.handlers):
        log.removeHandler(old)
        old.close()
    for handler in (logging.StreamHandler(sys.stdout), file_handler):
        handler.setFormatter(formatter)
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    log.propagate = False
    return log