"""Process-wide logging setup

IMPORTANT: Call `initialize_logging()` once at start-up (the CLI does so in
`main()`) before anything else logs.

Records go to stderr so they never interleave with the menu printed on stdout.
`LOG_LEVEL` picks the level (INFO by default) and `LOG_FORMAT` picks the
formatter: `json` (default) or `text`.

JSON format:
{
    "timestamp": "2026-10-19T12:00:00.000Z",
    "level": "INFO",
    "logger": "linkshortener.services.link_shortener_service",
    "message": "Short link created.",
    "event": "LINK_CREATED",
    "shortcode": "Xr4QsJ"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkshortener.constants import ENV


TEXT_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'


class JsonFormatter(logging.Formatter):
    """One JSON object per record, `extra={...}` fields included"""

    # Attributes every LogRecord carries; anything else came in through `extra`
    RESERVED = frozenset(logging.LogRecord('', 0, '', 0, '', (), None).__dict__) | {'message', 'asctime'}

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'timestamp': self.timestamp(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        payload.update((key, value) for key, value in record.__dict__.items() if key not in self.RESERVED)

        if record.exc_info:
            payload['exception'] = self.formatException(record.exc_info)

        # Extras may hold datetimes or models
        return json.dumps(payload, default=str)

    @staticmethod
    def timestamp(record: logging.LogRecord) -> str:
        moment = datetime.fromtimestamp(record.created, tz=UTC)
        return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def logging_config(level: str = 'INFO', fmt: str = 'json') -> dict:
    formatter = {'()': JsonFormatter} if fmt == 'json' else {'format': TEXT_FORMAT}
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'default': formatter},
        'handlers': {
            'stderr': {
                'class': 'logging.StreamHandler',
                'formatter': 'default',
                'stream': 'ext://sys.stderr',
            }
        },
        'root': {'level': level, 'handlers': ['stderr']},
    }


def initialize_logging() -> None:
    level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
    fmt = os.getenv(ENV.App.LOG_FORMAT, 'json').lower()
    logging.config.dictConfig(logging_config(level, fmt))
