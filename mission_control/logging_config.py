"""
Console logging setup.

configure_logging() runs once from create_app(). LOG_FORMAT picks between a
human-readable line and single-line JSON; LOG_LEVEL defaults to INFO.
Controller log calls pass lead_id / platform / status through ``extra=`` and
both formats carry them.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone


# Record attributes promoted into the output when a log call sets them
CONTEXT_FIELDS = ('lead_id', 'platform', 'status', 'leads_saved')

# Third-party loggers that are noisy at INFO
_NOISY_LOGGERS = [
    'urllib3',
    'werkzeug',
    'sqlalchemy.engine',
]


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log aggregators."""

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if record.exc_info and record.exc_info[0] is not None:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ContextTextFormatter(logging.Formatter):
    """Text lines with any context fields appended as key=value pairs."""

    def format(self, record):
        line = super().format(record)
        pairs = [f'{name}={getattr(record, name)}' for name in CONTEXT_FIELDS if hasattr(record, name)]
        if pairs:
            line = f"{line} [{' '.join(pairs)}]"
        return line


def configure_logging(app=None):
    """
    Install a single stderr handler on the root logger.

    Environment variables:
        LOG_LEVEL  — Python log level name (default: INFO)
        LOG_FORMAT — "text" (default) or "json"

    When a Flask app is given, its logger is pointed at the same handler.
    """
    level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    log_format = os.getenv('LOG_FORMAT', 'text').lower()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if log_format == 'json':
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ContextTextFormatter(
            '[%(asctime)s] %(levelname)s %(name)s — %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if app is not None:
        app.logger.handlers.clear()
        app.logger.propagate = True
