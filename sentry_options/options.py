import codecs
import os
from collections.abc import Iterable, Mapping
from contextvars import ContextVar

from sentry_options.consts import (
    DEFAULT_MAX_BREADCRUMBS,
    DEFAULT_OPTIONS,
    ENV_FALLBACKS,
    ERRORTYPE,
    OPTION_ATTRIBUTES,
)
from sentry_options.utils import (
    BadDsn,
    InvalidOption,
    UnknownOption,
    is_valid_sample_rate,
    iter_type_names,
    logger,
    normalize_excluded_path,
    parse_dsn,
    path_in,
)

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any
    from typing import Dict
    from typing import List
    from typing import Optional
    from typing import Union

    from sentry_options._types import (
        BreadcrumbProcessor,
        EventProcessor,
        ExcludedException,
    )
    from sentry_options.utils import Dsn


_options_debug = ContextVar("options_debug", default=False)


def _get_options(*args: "Any", **kwargs: "Any") -> "Dict[str, Any]":
    if args and (isinstance(args[0], (str, bytes)) or args[0] is None):
        dsn = args[0]  # type: Optional[Union[str, bytes]]
        args = args[1:]
        has_dsn = True
    else:
        dsn = None
        has_dsn = False

    options = dict(*args, **kwargs)
    if has_dsn and options.get("dsn") is None:
        options["dsn"] = dsn

    for key, value in options.items():
        if key not in DEFAULT_OPTIONS:
            raise UnknownOption(key, value)

    return options


def _validate_int(
    name: str,
    value: "Any",
    minimum: "Optional[int]" = None,
    maximum: "Optional[int]" = None,
) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidOption(name, value, "expected an integer")
    if minimum is not None and value < minimum:
        raise InvalidOption(name, value, "must be at least %s" % minimum)
    if maximum is not None and value > maximum:
        raise InvalidOption(name, value, "must be at most %s" % maximum)
    return value


def _validate_bool(name: str, value: "Any") -> bool:
    if not isinstance(value, bool):
        raise InvalidOption(name, value, "expected a boolean")
    return value


def _validate_optional_str(name: str, value: "Any") -> "Optional[str]":
    if value is not None and not isinstance(value, str):
        raise InvalidOption(name, value, "expected a string or None")
    return value


def _validate_str_list(name: str, value: "Any") -> "List[str]":
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise InvalidOption(name, value, "expected a list of strings")
    rv = list(value)
    for item in rv:
        if not isinstance(item, str):
            raise InvalidOption(name, value, "expected a list of strings")
    return rv


def _validate_callback(name: str, value: "Any") -> "Any":
    if value is not None and not callable(value):
        raise InvalidOption(name, value, "expected a callable or None")
    return value


class Options:
    """The configuration of the reporting client.

    Options are built from a DSN and/or a mapping of option keys, see
    :py:class:`sentry_options.consts.OptionsConstructor` for the keys and
    their defaults::

        options = Options("https://public@example.com/1", sample_rate=0.5)
        options.sample_rate = 0.25
        options["release"] = "1.0.0"

    Every assignment is validated, at construction and afterwards, and
    raises :py:class:`sentry_options.utils.InvalidOption` for values outside
    of the option's domain.
    """

    def __init__(self, *args: "Any", **kwargs: "Any") -> None:
        self._dsn = None  # type: Optional[str]
        self._parsed_dsn = None  # type: Optional[Dsn]

        options = _get_options(*args, **kwargs)

        values = dict(DEFAULT_OPTIONS)
        for key, env_name in ENV_FALLBACKS.items():
            if key not in options:
                values[key] = os.environ.get(env_name)
        values.update(options)

        # Applied first so that messages logged by the other setters show up.
        self.debug = values.pop("debug")
        for key, value in values.items():
            self[key] = value

    def _log_debug(self, msg: str, *args: "Any") -> None:
        # The log filter only sees the flag of the options doing the logging.
        old_debug = _options_debug.set(self._debug)
        try:
            logger.debug(msg, *args)
        finally:
            _options_debug.reset(old_debug)

    @staticmethod
    def _attribute_for(key: str) -> str:
        return OPTION_ATTRIBUTES.get(key, key)

    def __getitem__(self, key: str) -> "Any":
        if key not in DEFAULT_OPTIONS:
            raise KeyError(key)
        return getattr(self, self._attribute_for(key))

    def __setitem__(self, key: str, value: "Any") -> None:
        if key not in DEFAULT_OPTIONS:
            raise UnknownOption(key, value)
        setattr(self, self._attribute_for(key), value)

    def update(self, *args: "Any", **kwargs: "Any") -> None:
        """Sets several options at once. Unknown keys are rejected before
        anything is changed."""
        options = dict(*args, **kwargs)
        for key, value in options.items():
            if key not in DEFAULT_OPTIONS:
                raise UnknownOption(key, value)
        for key, value in options.items():
            self[key] = value

    @property
    def dsn(self) -> "Optional[str]":
        """The DSN as given, or ``None`` when reporting is disabled."""
        return self._dsn

    @dsn.setter
    def dsn(self, value: "Any") -> None:
        if isinstance(value, bytes):
            try:
                value = value.decode("utf-8")
            except UnicodeDecodeError:
                raise BadDsn(value, "Expected UTF-8") from None

        # Parsed before anything is stored so a bad DSN keeps the old one.
        parsed = parse_dsn(value)
        if parsed is None:
            self._log_debug("Reporting disabled by DSN value %r", value)
            self._dsn = None
        else:
            self._log_debug(
                "Reporting to project %s at %s", parsed.project_id, parsed.server
            )
            self._dsn = value
        self._parsed_dsn = parsed

    @property
    def parsed_dsn(self) -> "Optional[Dsn]":
        return self._parsed_dsn

    @property
    def server(self) -> "Optional[str]":
        if self._parsed_dsn is None:
            return None
        return self._parsed_dsn.server

    @property
    def public_key(self) -> "Optional[str]":
        if self._parsed_dsn is None:
            return None
        return self._parsed_dsn.public_key

    @property
    def secret_key(self) -> "Optional[str]":
        if self._parsed_dsn is None:
            return None
        return self._parsed_dsn.secret_key

    @property
    def project_id(self) -> "Optional[int]":
        if self._parsed_dsn is None:
            return None
        return self._parsed_dsn.project_id

    @property
    def is_enabled(self) -> bool:
        """Whether a DSN is configured, i.e. events can be sent."""
        return self._parsed_dsn is not None

    @property
    def send_attempts(self) -> int:
        return self._send_attempts

    @send_attempts.setter
    def send_attempts(self, value: int) -> None:
        self._send_attempts = _validate_int("send_attempts", value, minimum=1)

    @property
    def prefixes(self) -> "List[str]":
        """Path prefixes stripped from file names of stack frames."""
        return list(self._prefixes)

    @prefixes.setter
    def prefixes(self, value: "Iterable[str]") -> None:
        self._prefixes = _validate_str_list("prefixes", value)

    @property
    def serialize_all_objects(self) -> bool:
        return self._serialize_all_objects

    @serialize_all_objects.setter
    def serialize_all_objects(self, value: bool) -> None:
        self._serialize_all_objects = _validate_bool("serialize_all_object", value)

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    @sample_rate.setter
    def sample_rate(self, value: float) -> None:
        if not is_valid_sample_rate(value):
            raise InvalidOption(
                "sample_rate", value, "expected a number between 0 and 1"
            )
        self._sample_rate = float(value)

    @property
    def mb_detect_order(self) -> "Optional[List[str]]":
        """Encodings tried when decoding byte strings, always a list."""
        if self._mb_detect_order is None:
            return None
        return list(self._mb_detect_order)

    @mb_detect_order.setter
    def mb_detect_order(self, value: "Optional[Union[str, Iterable[str]]]") -> None:
        if value is None:
            self._mb_detect_order = None
            return

        encodings = _validate_str_list(
            "mb_detect_order", [value] if isinstance(value, str) else value
        )
        for encoding in encodings:
            try:
                codecs.lookup(encoding)
            except LookupError:
                raise InvalidOption(
                    "mb_detect_order", value, "unknown encoding %r" % encoding
                ) from None
        self._mb_detect_order = encodings

    @property
    def attach_stacktrace(self) -> bool:
        return self._attach_stacktrace

    @attach_stacktrace.setter
    def attach_stacktrace(self, value: bool) -> None:
        self._attach_stacktrace = _validate_bool("attach_stacktrace", value)

    @property
    def context_lines(self) -> int:
        return self._context_lines

    @context_lines.setter
    def context_lines(self, value: int) -> None:
        self._context_lines = _validate_int("context_lines", value, minimum=0)

    @property
    def enable_compression(self) -> bool:
        return self._enable_compression

    @enable_compression.setter
    def enable_compression(self, value: bool) -> None:
        self._enable_compression = _validate_bool("enable_compression", value)

    @property
    def environment(self) -> "Optional[str]":
        return self._environment

    @environment.setter
    def environment(self, value: "Optional[str]") -> None:
        self._environment = _validate_optional_str("environment", value)

    @property
    def excluded_exceptions(self) -> "List[ExcludedException]":
        return list(self._excluded_exceptions)

    @excluded_exceptions.setter
    def excluded_exceptions(self, value: "Iterable[ExcludedException]") -> None:
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            raise InvalidOption(
                "excluded_exceptions", value, "expected a list of exception types"
            )

        rv = list(value)
        for item in rv:
            if isinstance(item, str):
                if not item:
                    raise InvalidOption(
                        "excluded_exceptions", value, "empty exception name"
                    )
            elif not (isinstance(item, type) and issubclass(item, BaseException)):
                raise InvalidOption(
                    "excluded_exceptions",
                    value,
                    "%r is not an exception type" % (item,),
                )
        self._excluded_exceptions = rv

    @property
    def excluded_project_paths(self) -> "List[str]":
        """Excluded paths, directories carry a trailing separator."""
        return list(self._excluded_project_paths)

    @excluded_project_paths.setter
    def excluded_project_paths(self, value: "Iterable[str]") -> None:
        paths = _validate_str_list("excluded_app_paths", value)
        self._excluded_project_paths = [normalize_excluded_path(p) for p in paths]

    @property
    def project_root(self) -> "Optional[str]":
        return self._project_root

    @project_root.setter
    def project_root(self, value: "Optional[str]") -> None:
        self._project_root = _validate_optional_str("project_root", value)

    @property
    def logger(self) -> str:
        """The logger name attached to events."""
        return self._logger

    @logger.setter
    def logger(self, value: str) -> None:
        if not isinstance(value, str) or not value:
            raise InvalidOption("logger", value, "expected a non-empty string")
        self._logger = value

    @property
    def release(self) -> "Optional[str]":
        return self._release

    @release.setter
    def release(self, value: "Optional[str]") -> None:
        self._release = _validate_optional_str("release", value)

    @property
    def server_name(self) -> "Optional[str]":
        return self._server_name

    @server_name.setter
    def server_name(self, value: "Optional[str]") -> None:
        self._server_name = _validate_optional_str("server_name", value)

    @property
    def tags(self) -> "Dict[str, str]":
        return dict(self._tags)

    @tags.setter
    def tags(self, value: "Mapping[str, str]") -> None:
        if not isinstance(value, Mapping):
            raise InvalidOption("tags", value, "expected a mapping")
        for key, tag in value.items():
            if not isinstance(key, str) or not isinstance(tag, str):
                raise InvalidOption("tags", value, "tags must map strings to strings")
        self._tags = dict(value)

    @property
    def error_types(self) -> int:
        """Bitmask of :py:class:`sentry_options.consts.ERRORTYPE` values."""
        return self._error_types

    @error_types.setter
    def error_types(self, value: int) -> None:
        value = _validate_int("error_types", value, minimum=0)
        if value & ~ERRORTYPE.ALL:
            raise InvalidOption("error_types", value, "unknown error type bits")
        self._error_types = value

    @property
    def max_breadcrumbs(self) -> int:
        return self._max_breadcrumbs

    @max_breadcrumbs.setter
    def max_breadcrumbs(self, value: int) -> None:
        self._max_breadcrumbs = _validate_int(
            "max_breadcrumbs", value, minimum=0, maximum=DEFAULT_MAX_BREADCRUMBS
        )

    @property
    def before_send(self) -> "Optional[EventProcessor]":
        return self._before_send

    @before_send.setter
    def before_send(self, value: "Optional[EventProcessor]") -> None:
        self._before_send = _validate_callback("before_send", value)

    @property
    def before_breadcrumb(self) -> "Optional[BreadcrumbProcessor]":
        return self._before_breadcrumb

    @before_breadcrumb.setter
    def before_breadcrumb(self, value: "Optional[BreadcrumbProcessor]") -> None:
        self._before_breadcrumb = _validate_callback("before_breadcrumb", value)

    @property
    def debug(self) -> bool:
        return self._debug

    @debug.setter
    def debug(self, value: bool) -> None:
        self._debug = _validate_bool("debug", value)

    def is_excluded_exception(self, exc: "Union[BaseException, type]") -> bool:
        """Checks if an exception, or exception class, is excluded from
        reporting.

        Class entries match the class itself and all of its subclasses.
        String entries are compared with the bare and the module qualified
        name of every class the exception inherits from, so ``"OSError"``
        also excludes ``FileNotFoundError``.
        """
        exc_type = exc if isinstance(exc, type) else type(exc)

        type_names = None
        for excluded in self._excluded_exceptions:
            if isinstance(excluded, str):
                if type_names is None:
                    type_names = set(iter_type_names(exc_type))
                if excluded in type_names:
                    return True
            elif issubclass(exc_type, excluded):
                return True

        return False

    def is_excluded_path(self, path: str) -> bool:
        return any(path_in(path, excluded) for excluded in self._excluded_project_paths)

    def is_in_project(self, path: str) -> bool:
        """Checks if a file belongs to the project: it lies under
        ``project_root`` and not under one of the excluded paths."""
        if self._project_root is None:
            return False
        return path_in(path, self._project_root) and not self.is_excluded_path(path)

    def is_error_type_enabled(self, error_type: int) -> bool:
        return bool(self._error_types & error_type)
