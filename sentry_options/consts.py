import itertools
import socket
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any
    from typing import Dict
    from typing import Iterable
    from typing import Mapping
    from typing import Optional
    from typing import Union

    from sentry_options._types import BreadcrumbProcessor, EventProcessor


DEFAULT_SEND_ATTEMPTS = 3
DEFAULT_CONTEXT_LINES = 3
DEFAULT_MAX_BREADCRUMBS = 100
DEFAULT_LOGGER = "python"

# String forms of the DSN which turn reporting off. Compared lowercased.
DISABLED_DSN_VALUES = frozenset(
    [
        "",
        "null",
        "(null)",
        "false",
        "(false)",
        "empty",
        "(empty)",
    ]
)

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
}


class ERRORTYPE:
    """
    Categories of problems the client reports. ``error_types`` is a bitmask
    of these values.
    """

    EXCEPTION = 1
    LOG_ERROR = 2
    WARNING = 4
    DEPRECATION = 8
    UNRAISABLE = 16

    ALL = EXCEPTION | LOG_ERROR | WARNING | DEPRECATION | UNRAISABLE


def _default_server_name():
    # type: () -> Optional[str]
    if hasattr(socket, "gethostname"):
        return socket.gethostname()
    return None


class OptionsConstructor:
    def __init__(
        self,
        dsn=None,  # type: Optional[str]
        *,
        send_attempts=DEFAULT_SEND_ATTEMPTS,  # type: int
        prefixes=[],  # type: Iterable[str]  # noqa: B006
        serialize_all_object=False,  # type: bool
        sample_rate=1.0,  # type: float
        mb_detect_order=None,  # type: Optional[Union[str, Iterable[str]]]
        attach_stacktrace=False,  # type: bool
        context_lines=DEFAULT_CONTEXT_LINES,  # type: int
        enable_compression=True,  # type: bool
        environment=None,  # type: Optional[str]
        excluded_exceptions=[],  # type: Iterable[Union[type, str]]  # noqa: B006
        excluded_app_paths=[],  # type: Iterable[str]  # noqa: B006
        project_root=None,  # type: Optional[str]
        logger=DEFAULT_LOGGER,  # type: str
        release=None,  # type: Optional[str]
        server_name=_default_server_name(),  # type: Optional[str]
        tags={},  # type: Mapping[str, str]  # noqa: B006
        error_types=ERRORTYPE.ALL,  # type: int
        max_breadcrumbs=DEFAULT_MAX_BREADCRUMBS,  # type: int
        before_send=None,  # type: Optional[EventProcessor]
        before_breadcrumb=None,  # type: Optional[BreadcrumbProcessor]
        debug=False,  # type: bool
    ):
        # type: (...) -> None
        """Configure the reporting client. All parameters described here can
        be passed to :py:class:`sentry_options.Options`.

        :param dsn: The DSN tells the client where to send events.

            If this option is not set, the ``SENTRY_DSN`` environment variable
            is used. ``None``, ``False``, ``""`` and the strings ``"null"``,
            ``"false"`` and ``"empty"`` disable reporting.

        :param send_attempts: How often the transport tries to send an event
            before giving up. At least 1.

        :param prefixes: Path prefixes stripped from file names in stack
            traces.

        :param serialize_all_object: Serialize every object found in frame
            variables, not only the well known ones.

        :param sample_rate: Sample rate for error events, in the range
            ``0.0`` to ``1.0``. ``1.0`` sends every event.

        :param mb_detect_order: Encodings tried, in order, when decoding byte
            strings. A single name or a list of names.

        :param attach_stacktrace: Attach a stack trace to messages that are
            not exceptions.

        :param context_lines: Lines of source shown around each frame.

        :param enable_compression: Compress payloads before sending them.

        :param environment: The environment events are tagged with. Falls
            back to ``SENTRY_ENVIRONMENT``.

        :param excluded_exceptions: Exception classes, or their names, that
            are never reported. Subclasses are excluded too.

        :param excluded_app_paths: Paths whose frames are not considered
            part of the project. Directories gain a trailing separator.

        :param project_root: Root directory of the project.

        :param logger: Logger name attached to events.

        :param release: The release events are tagged with. Falls back to
            ``SENTRY_RELEASE``.

        :param server_name: Host name attached to events. Defaults to the
            machine's host name.

        :param tags: Tags attached to every event.

        :param error_types: Bitmask of :py:class:`ERRORTYPE` values that are
            reported.

        :param max_breadcrumbs: Maximum number of breadcrumbs kept, at most
            100.

        :param before_send: Called with every event before it is sent. It can
            modify the event or return ``None`` to drop it.

        :param before_breadcrumb: Called with every breadcrumb before it is
            recorded. It can modify the breadcrumb or return ``None`` to drop
            it.

        :param debug: Print diagnostic messages of the client to stderr.
        """
        pass


def _get_default_options():
    # type: () -> Dict[str, Any]
    import inspect

    a = inspect.getfullargspec(OptionsConstructor.__init__)
    defaults = a.defaults or ()
    kwonlydefaults = a.kwonlydefaults or {}

    return dict(
        itertools.chain(
            zip(a.args[-len(defaults) :], defaults),
            kwonlydefaults.items(),
        )
    )


DEFAULT_OPTIONS = _get_default_options()
del _get_default_options


VERSION = "1.0.0"

# Option keys whose attribute on ``Options`` is spelled differently.
OPTION_ATTRIBUTES = {
    "excluded_app_paths": "excluded_project_paths",
    "serialize_all_object": "serialize_all_objects",
}  # type: Dict[str, str]

ENV_FALLBACKS = {
    "dsn": "SENTRY_DSN",
    "release": "SENTRY_RELEASE",
    "environment": "SENTRY_ENVIRONMENT",
}  # type: Dict[str, str]
