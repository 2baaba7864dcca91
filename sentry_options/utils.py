import ipaddress
import logging
import math
import os
import re
from datetime import datetime
from decimal import Decimal
from numbers import Real
from urllib.parse import urlsplit

from sentry_options.consts import DEFAULT_PORTS, DISABLED_DSN_VALUES

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any
    from typing import Iterator
    from typing import Optional
    from typing import Union


epoch = datetime(1970, 1, 1)

PROJECT_ID_REGEX = re.compile("^[0-9]+$")

logger = logging.getLogger("sentry_options.errors")


def to_timestamp(value: "datetime") -> float:
    return (value - epoch).total_seconds()


def _format_option_value(value: "Any") -> str:
    if isinstance(value, str):
        return '"%s"' % value
    return repr(value)


class InvalidOption(ValueError):
    """Raised when an option is given a value outside of its domain."""

    def __init__(
        self, name: str, value: "Any", reason: "Optional[str]" = None
    ) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        ValueError.__init__(self, self._format_message())

    def _format_message(self) -> str:
        rv = 'The option "%s" with value %s is invalid' % (
            self.name,
            _format_option_value(self.value),
        )
        if self.reason:
            rv = "%s: %s" % (rv, self.reason)
        return rv + "."


class UnknownOption(InvalidOption, TypeError):
    """Raised for configuration keys the options do not know about."""

    def _format_message(self) -> str:
        return 'The option "%s" does not exist.' % (self.name,)


class BadDsn(InvalidOption):
    """Raised on invalid DSNs."""

    def __init__(self, value: "Any", reason: "Optional[str]" = None) -> None:
        InvalidOption.__init__(self, "dsn", value, reason)


class Dsn:
    """Represents a DSN."""

    def __init__(self, value: "Union[Dsn, str]") -> None:
        if isinstance(value, Dsn):
            self.__dict__ = dict(value.__dict__)
            return

        if not isinstance(value, str):
            raise BadDsn(value, "Expected a string")

        try:
            parts = urlsplit(value)
            hostname = parts.hostname
            username = parts.username
            password = parts.password
        except ValueError:
            raise BadDsn(value, "Invalid URL") from None

        if parts.scheme not in ("http", "https"):
            raise BadDsn(value, "Unsupported scheme %r" % parts.scheme)
        self.scheme = parts.scheme

        if hostname is None:
            raise BadDsn(value, "Missing hostname")
        bracketed = parts.netloc.rpartition("@")[2].startswith("[")
        if bracketed and not _is_ipv6(hostname):
            raise BadDsn(value, "Invalid IPv6 host")
        self.host = hostname

        try:
            port = parts.port
        except ValueError:
            raise BadDsn(value, "Invalid port") from None
        self.port = port if port is not None else DEFAULT_PORTS[self.scheme]

        self.public_key = username
        if not self.public_key:
            raise BadDsn(value, "Missing public key")

        # An explicitly empty secret ("public:@host") is malformed, while a
        # missing one is the modern single-key form.
        self.secret_key = password
        if self.secret_key is not None and not self.secret_key:
            raise BadDsn(value, "Empty secret key")

        path, _, project_id = parts.path.rpartition("/")
        if not PROJECT_ID_REGEX.match(project_id):
            raise BadDsn(
                value, "Invalid project in DSN (%r)" % (parts.path or "")[1:]
            )
        self.project_id = int(project_id)
        self.path = path.rstrip("/")

    @property
    def netloc(self) -> str:
        """The netloc part of a DSN."""
        rv = self.host
        if ":" in rv:
            rv = "[%s]" % rv
        if self.port != DEFAULT_PORTS[self.scheme]:
            rv = "%s:%s" % (rv, self.port)
        return rv

    @property
    def server(self) -> str:
        """The server endpoint: scheme, host, port and path prefix."""
        return "%s://%s%s" % (self.scheme, self.netloc, self.path)

    def to_auth(self, client: "Optional[Any]" = None) -> "Auth":
        """Returns the auth info object for this dsn."""
        return Auth(
            scheme=self.scheme,
            host=self.netloc,
            path=self.path,
            project_id=self.project_id,
            public_key=self.public_key,
            secret_key=self.secret_key,
            client=client,
        )

    def __str__(self) -> str:
        return "%s://%s%s@%s%s/%s" % (
            self.scheme,
            self.public_key,
            self.secret_key and ":" + self.secret_key or "",
            self.netloc,
            self.path,
            self.project_id,
        )

    def __repr__(self) -> str:
        return "<Dsn %s>" % (self,)


def _is_ipv6(host: str) -> bool:
    try:
        return ipaddress.ip_address(host.partition("%")[0]).version == 6
    except ValueError:
        return False


def parse_dsn(value: "Any") -> "Optional[Dsn]":
    """Parses a DSN option value.

    Returns ``None`` when the value turns reporting off, a :py:class:`Dsn`
    otherwise. Raises :py:class:`BadDsn` for malformed values.
    """
    if value is None or value is False:
        return None
    if isinstance(value, str) and value.lower() in DISABLED_DSN_VALUES:
        return None
    return Dsn(value)


class Auth:
    """Helper object that represents the auth info."""

    def __init__(
        self,
        scheme: str,
        host: str,
        project_id: int,
        public_key: str,
        secret_key: "Optional[str]" = None,
        version: int = 7,
        client: "Optional[Any]" = None,
        path: str = "",
    ) -> None:
        self.scheme = scheme
        self.host = host
        self.path = path
        self.project_id = project_id
        self.public_key = public_key
        self.secret_key = secret_key
        self.version = version
        self.client = client

    def get_api_url(self) -> str:
        """Returns the API url for storing events."""
        return "%s://%s%s/api/%s/store/" % (
            self.scheme,
            self.host,
            self.path,
            self.project_id,
        )

    def to_header(self, timestamp: "Optional[datetime]" = None) -> str:
        """Returns the auth header a string."""
        rv = [("sentry_key", self.public_key), ("sentry_version", self.version)]
        if timestamp is not None:
            rv.append(("sentry_timestamp", str(to_timestamp(timestamp))))
        if self.client is not None:
            rv.append(("sentry_client", self.client))
        if self.secret_key is not None:
            rv.append(("sentry_secret", self.secret_key))
        return "Sentry " + ", ".join("%s=%s" % (key, value) for key, value in rv)


def get_type_name(cls: "Optional[type]") -> "Optional[str]":
    return getattr(cls, "__qualname__", None) or getattr(cls, "__name__", None)


def get_type_module(cls: "Optional[type]") -> "Optional[str]":
    mod = getattr(cls, "__module__", None)
    if mod not in (None, "builtins", "__builtins__"):
        return mod
    return None


def iter_type_names(cls: type) -> "Iterator[str]":
    """Yields the bare and the qualified name of every class in the MRO of
    ``cls``. Builtins are also reachable as ``builtins.<name>``."""
    for base in cls.__mro__:
        name = get_type_name(base)
        if name is None:
            continue
        yield name
        yield "%s.%s" % (get_type_module(base) or "builtins", name)


def is_valid_sample_rate(rate: "Any") -> bool:
    # booleans are instances of Real, Decimal is not, and NaN passes both checks
    if isinstance(rate, bool):
        return False
    if not isinstance(rate, (Real, Decimal)):
        return False

    # huge ints overflow and signaling NaN Decimals refuse the conversion
    try:
        rate = float(rate)
    except (OverflowError, ValueError):
        return False
    if math.isnan(rate):
        return False
    return 0 <= rate <= 1


def normalize_excluded_path(path: str) -> str:
    """Appends a trailing separator to paths of existing directories."""
    if os.path.isdir(path):
        return os.path.join(path, "")
    return path


def path_in(path: str, prefix: str) -> bool:
    """Checks if ``path`` is ``prefix`` or lies below it.

    ``/a/b`` is below ``/a`` but not below ``/a/b/c`` or ``/a/bc``.
    """
    if not path or not prefix:
        return False
    if path == prefix:
        return True
    if prefix.endswith(os.sep):
        return path.startswith(prefix)
    return path.startswith(prefix + os.sep)
