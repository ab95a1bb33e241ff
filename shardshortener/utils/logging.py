"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` at process startup before any other
logging is done.

Logging format:
{
    "timestamp": "2026-10-19T12:00:00.000Z",
    "level": "INFO",
    "logger": "shardshortener.services.shorten_url",
    "message": "SHORTEN => URL: https://example.com => SHORTCODE: gY3Ab7",
    "shortcode": "gY3Ab7",
    "shard": "default",
    "event": "SHORT_URL_CREATED"
}

Every record carries the shard the process serves, including uvicorn's
server and access logs. An explicit `extra={'shard': ...}` wins over it.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from shardshortener.utils.constants import ENV, Defaults


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    STANDARD_ATTRS = frozenset(
        {
            'args',
            'asctime',
            'created',
            'exc_info',
            'exc_text',
            'filename',
            'funcName',
            'levelname',
            'levelno',
            'lineno',
            'module',
            'msecs',
            'msg',
            'name',
            'pathname',
            'process',
            'processName',
            'relativeCreated',
            'stack_info',
            'thread',
            'threadName',
            'taskName',
            'color_message',
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS:
                log[key] = value

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


class ShardContextFilter(logging.Filter):
    """Stamp records with the served shard unless they name one already"""

    def __init__(self, shard: str | None = None):
        super().__init__()
        self.shard = shard

    def filter(self, record: logging.LogRecord) -> bool:
        if self.shard is not None and not hasattr(record, 'shard'):
            record.shard = self.shard
        return True


def initialize_logging(level: str | None = None, shard: str | None = None) -> None:
    log_level = (level or os.getenv(ENV.LOG_LEVEL, Defaults.LOG_LEVEL)).upper()
    shard = shard or os.getenv(ENV.SHARD)
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'filters': {
                'shard': {
                    '()': ShardContextFilter,
                    'shard': shard,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'filters': ['shard'],
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
