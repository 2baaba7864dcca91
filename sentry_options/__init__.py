from sentry_options.options import Options
from sentry_options.utils import (
    Auth,
    BadDsn,
    Dsn,
    InvalidOption,
    UnknownOption,
    parse_dsn,
)

from sentry_options.consts import ERRORTYPE, VERSION  # noqa

__all__ = [  # noqa
    "Auth",
    "BadDsn",
    "Dsn",
    "ERRORTYPE",
    "InvalidOption",
    "Options",
    "UnknownOption",
    "VERSION",
    "parse_dsn",
]

# Initialize the debug support after everything is loaded
from sentry_options.debug import init_debug_support

init_debug_support()
del init_debug_support
