"""Zabbix API session client

Logs in once, keeps the auth token in an encrypted session file and reuses it
across processes. When a call fails because the token is no longer accepted,
the client logs in again and retries the call one more time.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Callable, Mapping

from .__version__ import __version__
from .cipher.aes import AesTokenCipher
from .cipher.base import TokenCipher
from .codec.base import RequestCodec
from .codec.jsonrpc import JsonRpcCodec
from .core.exceptions import NotLoggedIn, RemoteApiError, ZabbixApiError
from .core.types import (
    UNAUTHENTICATED_METHODS,
    Account,
    CallOutcome,
    ClientOptions,
)
from .logging_setup import enable_debug
from .storage.base import TokenStorage
from .storage.session_file import SessionFileStorage
from .transport.base import Transport
from .transport.curl import CurlTransport

logger = logging.getLogger(__name__)

TOKEN_LENGTH = 32
MAX_ATTEMPTS = 2
PROBE_METHOD = "user.get"
PROBE_PARAMS = {"output": "userid"}

# Fragments of server error texts meaning the token was rejected
AUTH_ERROR_MARKERS = (
    "session terminated",
    "re-login",
    "not authorised",
    "not authorized",
    "not logged in",
)


def is_auth_failure(error: ZabbixApiError | None) -> bool:
    """Whether error means the token is missing, invalid or expired"""
    if isinstance(error, NotLoggedIn):
        return True
    if isinstance(error, RemoteApiError):
        text = f"{error.remote_message} {error.data or ''}".lower()
        return any(marker in text for marker in AUTH_ERROR_MARKERS)
    return False


class ZabbixClient:
    """Client for the Zabbix JSON-RPC API with a persistent, encrypted session"""

    # Newer servers (5.4+) also accept "username"
    login_user_field = "user"

    def __init__(
        self,
        transport: Transport | None = None,
        codec: RequestCodec | None = None,
        cipher: TokenCipher | None = None,
        storage_factory: Callable[[Path, TokenCipher], TokenStorage] | None = None,
    ):
        self._transport = transport or CurlTransport()
        self._codec = codec or JsonRpcCodec()
        self._cipher = cipher or AesTokenCipher()
        self._storage_factory = storage_factory or SessionFileStorage

        self._account: Account | None = None
        self._options = ClientOptions()
        self._storage: TokenStorage | None = None
        self._auth_key = ""
        self._relogin_count = 0

    def login(
        self,
        url: str,
        user: str,
        password: str,
        options: Mapping[str, Any] | None = None,
    ) -> bool:
        """
        Setup the session and make sure it is usable.

        Reuses the token from the session file when there is one, then
        validates it with a probe call (which logs in again if needed).

        Returns:
            True if the reused session token is the one that ended up active
        """
        client_options = ClientOptions.from_dict(options)
        account = Account(url=url, user=user, password=password)

        self._account = account
        self._options = client_options
        self._storage = self._storage_factory(client_options.session_dir, self._cipher)
        self._auth_key = ""

        if client_options.debug:
            enable_debug(True)

        logger.debug(f"[zbxapi login] Using user:{account.user}, url:{account.url}")
        logger.debug(
            f"[zbxapi login] Using sslVerifyPeer:{client_options.ssl_verify_peer} "
            f"sslVerifyHost:{client_options.ssl_verify_host} "
            f"useGzip:{client_options.use_gzip} timeout:{client_options.timeout} "
            f"connectTimeout:{client_options.connect_timeout}"
        )
        logger.debug(
            f"[zbxapi login] Using sessionDir:{self.session_dir}, "
            f"sessionFileName:{self.session_file_name}"
        )

        reused = self._load_session()
        relogins_before = self._relogin_count
        self.call(PROBE_METHOD, PROBE_PARAMS)
        return reused and self._relogin_count == relogins_before

    def call(self, method: str, params: Any = None) -> Any:
        """
        Call a Zabbix API method, e.g. 'host.get'.

        If the current token is rejected, logs in again and retries once.
        Only valid after login() has been called.
        """
        if self._account is None:
            raise NotLoggedIn()

        outcome = CallOutcome()
        for attempt in range(1, MAX_ATTEMPTS + 1):
            outcome = self._attempt(method, params)
            if outcome.ok or attempt == MAX_ATTEMPTS:
                break
            if not is_auth_failure(outcome.error):
                break

            logger.info(f"[zbxapi call] {method} rejected, logging in again: {outcome.error}")
            self._relogin()

        return outcome.unwrap()

    def logout(self):
        """
        Logout from the server and delete the session file.

        The local session is removed even if the server call fails, so the
        session cannot be reused afterwards.
        """
        if self._account is None or self._storage is None:
            raise NotLoggedIn()

        logger.debug("[zbxapi logout] Delete sessionFile and logout from Zabbix")
        try:
            self._dispatch("user.logout", [])
        finally:
            self._auth_key = ""
            self._storage.delete(self._account)

    def get_api_version(self) -> str:
        return self.call("apiinfo.version")

    def get_version(self) -> str:
        """Version of this library"""
        return __version__

    def set_debug(self, status: bool):
        self._options = dataclasses.replace(self._options, debug=bool(status))
        enable_debug(bool(status))

    @property
    def auth_key(self) -> str:
        return self._auth_key

    @property
    def account(self) -> Account | None:
        return self._account

    @property
    def options(self) -> ClientOptions:
        return self._options

    @property
    def session_dir(self) -> Path:
        if self._storage is None:
            return self._options.session_dir
        return self._storage.session_dir

    @property
    def session_file_name(self) -> str:
        if self._storage is None or self._account is None:
            return ""
        return self._storage.path_for(self._account).name

    @property
    def session_file(self) -> Path | None:
        if self._storage is None or self._account is None:
            return None
        return self._storage.path_for(self._account)

    def _load_session(self) -> bool:
        """Adopt the token from the session file, if any"""
        token = self._storage.load(self._account)
        if token:
            self._auth_key = token
            logger.debug("[zbxapi session] Loaded session from sessionFile")
            return True

        logger.debug(
            "[zbxapi session] No valid token found in sessionFile or sessionFile does not exist"
        )
        return False

    def _relogin(self) -> bool:
        """
        Exchange credentials for a new token and save it to the session file.
        The current token is dropped first, so a failed login leaves none.
        """
        self._relogin_count += 1
        self._auth_key = ""

        logger.debug(f"[zbxapi login] Logging in as {self._account.user}")
        response = self._dispatch(
            "user.login",
            {self.login_user_field: self._account.user, "password": self._account.password},
        )

        if isinstance(response, str) and len(response) == TOKEN_LENGTH:
            self._storage.save(self._account, response)
            self._auth_key = response
            return True

        logger.warning(f"[zbxapi login] Unexpected login response: {response!r}")
        return False

    def _attempt(self, method: str, params: Any) -> CallOutcome:
        try:
            return CallOutcome(value=self._dispatch(method, params))
        except ZabbixApiError as e:
            return CallOutcome(error=e)

    def _dispatch(self, method: str, params: Any = None) -> Any:
        """Single request/response round trip with the current token"""
        if not self._auth_key and method not in UNAUTHENTICATED_METHODS:
            raise NotLoggedIn("Not logged in and no authKey")

        body = self._codec.encode(method, params, self._auth_key)
        raw = self._transport.post(self._account.api_url, body, self._options)
        logger.debug(f"[zbxapi call] Raw response from API: {raw}")
        return self._codec.decode(raw)
