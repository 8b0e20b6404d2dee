"""JSON logging for hosts of the link registry

IMPORTANT: The library never configures logging on import. A hosting process
(CLI, web handler, worker) calls `initialize_logging()` once at startup.

Every record becomes one JSON object per line. Fields passed through `extra`
are appended after the base fields:
{
    "timestamp": "2025-10-15T12:00:00.000Z",
    "level": "INFO",
    "logger": "linkshortener.core.registry",
    "message": "Registered short link.",
    "shortcode": "abc123",
    "event": "LINK_REGISTERED"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkshortener.constants import ENV


# Attributes every LogRecord carries, plus those set by Formatter.format()
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Render a LogRecord and its `extra` fields as a single JSON line"""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        log = {
            'timestamp': created.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        log.update((key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS)
        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Send JSON logs of every logger to stdout.

    Args:
        level (str | None): root log level; defaults to LOG_LEVEL, then INFO.
    """
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL) or 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {'level': log_level, 'handlers': ['stdout']},
        }
    )
