"""Core data types for the Zabbix API client"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .exceptions import ConfigurationError, InvalidOption, ZabbixApiError

# Methods the server accepts without an auth token
UNAUTHENTICATED_METHODS = frozenset({"user.login", "apiinfo.version"})

DEFAULT_TIMEOUT = 30
DEFAULT_CONNECT_TIMEOUT = 10

VALID_OPTIONS = (
    "debug",
    "sessionDir",
    "sslCaFile",
    "sslVerifyHost",
    "sslVerifyPeer",
    "useGzip",
    "timeout",
    "connectTimeout",
)


@dataclass(frozen=True)
class Account:
    """Zabbix endpoint plus credentials; url + user identify the cached session"""

    url: str
    user: str
    password: str

    def __post_init__(self):
        if not self.url.endswith("/"):
            object.__setattr__(self, "url", self.url + "/")

    @property
    def api_url(self) -> str:
        return f"{self.url}api_jsonrpc.php"

    def __repr__(self) -> str:
        return f"Account(url={self.url!r}, user={self.user!r}, password='***')"


def _positive_or_default(value: Any, default: int) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


@dataclass(frozen=True)
class ClientOptions:
    """Transport and session-cache settings, built once per login"""

    debug: bool = False
    session_dir: Path = Path(tempfile.gettempdir())
    ssl_ca_file: str | None = None
    ssl_verify_peer: bool = True
    ssl_verify_host: bool = True
    use_gzip: bool = True
    timeout: float = DEFAULT_TIMEOUT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT

    @classmethod
    def from_dict(cls, options: Mapping[str, Any] | None = None) -> "ClientOptions":
        """
        Validate a login() options mapping. Unknown keys raise InvalidOption,
        an unusable sessionDir or sslCaFile raises ConfigurationError.
        """
        options = dict(options or {})
        for key in options:
            if key not in VALID_OPTIONS:
                raise InvalidOption(key)

        ssl_ca_file = None
        if "sslCaFile" in options:
            ssl_ca_file = str(options["sslCaFile"])
            if not Path(ssl_ca_file).is_file():
                raise ConfigurationError(
                    f"Error - sslCaFile:{ssl_ca_file} is not a valid file"
                )

        if "sessionDir" in options:
            try:
                session_dir = Path(options["sessionDir"])
            except TypeError as e:
                raise ConfigurationError(
                    f"Error - sessionDir:{options['sessionDir']} is not a valid directory"
                ) from e
            if not session_dir.is_dir():
                raise ConfigurationError(
                    f"Error - sessionDir:{session_dir} is not a valid directory"
                )
            if not _is_writable(session_dir):
                raise ConfigurationError(
                    f"Error - sessionDir:{session_dir} is not a writeable directory"
                )
        else:
            session_dir = Path(tempfile.gettempdir())

        return cls(
            debug=bool(options.get("debug", False)),
            session_dir=session_dir,
            ssl_ca_file=ssl_ca_file,
            ssl_verify_peer=bool(options.get("sslVerifyPeer", True)),
            ssl_verify_host=bool(options.get("sslVerifyHost", True)),
            use_gzip=bool(options.get("useGzip", True)),
            timeout=_positive_or_default(
                options.get("timeout", DEFAULT_TIMEOUT), DEFAULT_TIMEOUT
            ),
            connect_timeout=_positive_or_default(
                options.get("connectTimeout", DEFAULT_CONNECT_TIMEOUT),
                DEFAULT_CONNECT_TIMEOUT,
            ),
        )


def _is_writable(path: Path) -> bool:
    return os.access(path, os.W_OK)


@dataclass
class CallOutcome:
    """Result of a single call attempt: either a value or an error"""

    value: Any = None
    error: ZabbixApiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value
