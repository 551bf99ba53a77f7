import logging
import sys

# libraries that are chatty at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "alembic.runtime.migration")


def setup_logging(level: int | str = logging.INFO):
    """Route every log record to stderr; stdout is reserved for CLI results."""
    root = logging.getLogger()
    root.setLevel(level)

    while root.hasHandlers():
        root.removeHandler(root.handlers[0])

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname).1s | %(name)-30.30s | %(message)s"
    ))
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(root.level, logging.WARNING))

    return root
