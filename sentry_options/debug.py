import sys
import logging
from logging import LogRecord

from sentry_options.options import _options_debug
from sentry_options.utils import logger


class _OptionsDebugFilter(logging.Filter):
    def filter(self, record: "LogRecord") -> bool:
        return _options_debug.get()


def init_debug_support() -> None:
    if not logger.handlers:
        configure_logger()


def configure_logger() -> None:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(" [sentry] %(levelname)s: %(message)s"))
    logger.addHandler(_handler)
    logger.setLevel(logging.DEBUG)
    logger.addFilter(_OptionsDebugFilter())
