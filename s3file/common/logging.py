import json
import logging
from logging.config import dictConfig

# AWS SDK loggers are chatty at INFO/DEBUG and log request details.
QUIET_LOGGERS = ("boto3", "botocore", "s3transfer", "urllib3")


def setup_logging(level: str = "INFO", *, json_output: bool = True) -> None:
    level = level.upper()
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": JsonFormatter,
                },
                "plain": {
                    "format": "%(levelname)s %(name)s [%(threadName)s]: %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json" if json_output else "plain",
                },
            },
            "loggers": {
                "s3file": {"level": level},
                **{name: {"level": "WARNING"} for name in QUIET_LOGGERS},
            },
            "root": {
                "level": level,
                "handlers": ["console"],
            },
        }
    )


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        if hasattr(record, "extra") and isinstance(record.extra, dict):
            payload.update(record.extra)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)
