"""Custom exceptions for the Zabbix API client"""

from typing import Any

# Code carried by errors raised by the library itself (not by the server)
EXCEPTION_CLASS_CODE = 1000


class ZabbixApiError(Exception):
    """Base exception for the Zabbix API client"""

    def __init__(self, message: str, code: int = EXCEPTION_CLASS_CODE):
        self.message = message
        self.code = code
        super().__init__(message)


class ConfigurationError(ZabbixApiError):
    """Bad or missing option, unusable session directory or CA file"""

    pass


class InvalidOption(ConfigurationError):
    """Unrecognized option key passed to login()"""

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"Invalid option used. option:{option}")


class NotLoggedIn(ZabbixApiError):
    """Call issued before login() or without an auth token"""

    def __init__(self, message: str = "Not logged in. Call login() first."):
        super().__init__(message)


class TransportError(ZabbixApiError):
    """HTTP-level failure, code is the HTTP status (0 if none was received)"""

    def __init__(
        self,
        status: int,
        detail: str = "",
        ssl_verify_result: int = 0,
    ):
        self.status = status
        self.detail = detail
        self.ssl_verify_result = ssl_verify_result
        msg = f"Request failed with HTTP-Code:{status}, sslVerifyResult:{ssl_verify_result}."
        if detail:
            msg += f" {detail}"
        super().__init__(msg, code=status)


class TlsError(TransportError):
    """Certificate or hostname verification failed"""

    def __init__(self, ssl_verify_result: int, detail: str = ""):
        self.status = 0
        self.detail = detail
        self.ssl_verify_result = ssl_verify_result
        ZabbixApiError.__init__(
            self,
            f"Request failed with SSL-Verify-Result:{ssl_verify_result}. {detail}".strip(),
            code=ssl_verify_result,
        )


class RemoteApiError(ZabbixApiError):
    """Well-formed error response returned by the Zabbix server"""

    def __init__(self, code: int, message: str, data: Any = None):
        self.remote_message = message
        self.data = data
        super().__init__(f"{message} [{data if data is not None else ''}]", code=code)


class StorageError(ZabbixApiError):
    """Session file could not be opened or written"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}. sessionFile:{path}")


class DecodeError(ZabbixApiError):
    """Response body is not a recognizable JSON-RPC response"""

    def __init__(self, detail: str = "Error without further information.", raw: Any = None):
        self.raw = raw
        super().__init__(detail)
