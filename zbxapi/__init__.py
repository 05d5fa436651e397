"""zbxapi - Zabbix JSON-RPC API client with a persistent, encrypted session"""

from .__version__ import __version__
from .client import ZabbixClient, is_auth_failure
from .core.exceptions import (
    EXCEPTION_CLASS_CODE,
    ConfigurationError,
    DecodeError,
    InvalidOption,
    NotLoggedIn,
    RemoteApiError,
    StorageError,
    TlsError,
    TransportError,
    ZabbixApiError,
)
from .core.types import Account, ClientOptions

__all__ = [
    "__version__",
    "ZabbixClient",
    "is_auth_failure",
    "Account",
    "ClientOptions",
    "EXCEPTION_CLASS_CODE",
    "ZabbixApiError",
    "ConfigurationError",
    "InvalidOption",
    "NotLoggedIn",
    "TransportError",
    "TlsError",
    "RemoteApiError",
    "StorageError",
    "DecodeError",
]
