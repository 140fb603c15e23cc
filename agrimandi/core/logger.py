import logging
import json
import os
from logging.handlers import RotatingFileHandler
from datetime import datetime, timezone

from agrimandi.core.config import settings

EXTRA_FIELDS = ("request_id", "user_id", "path", "method", "status_code", "duration_ms")


def json_formatter(record):
    log = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": record.levelname,
        "service": settings.APP_NAME,
        "message": record.getMessage(),
    }

    for field in EXTRA_FIELDS:
        if hasattr(record, field):
            log[field] = getattr(record, field)

    if record.exc_info:
        log["exception"] = logging.Formatter().formatException(record.exc_info)

    return json.dumps(log, default=str)


class JSONFormatter(logging.Formatter):
    def format(self, record):
        return json_formatter(record)


logger = logging.getLogger("agrimandi")
logger.setLevel(settings.LOG_LEVEL)

json_f = JSONFormatter()

console_handler = logging.StreamHandler()
console_handler.setFormatter(json_f)

if not logger.handlers:
    logger.addHandler(console_handler)

    if settings.LOG_FILE:
        log_dir = os.path.dirname(settings.LOG_FILE)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.LOG_FILE,
            maxBytes=5 * 1024 * 1024,
            backupCount=5
        )
        file_handler.setFormatter(json_f)
        logger.addHandler(file_handler)
