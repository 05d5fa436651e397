"""Shared pytest fixtures and configuration."""

import json
import uuid

import pytest

from zbxapi import ZabbixClient

ZABBIX_URL = "https://zabbix.example.com/zabbix"
ZABBIX_USER = "admin"
ZABBIX_PASSWORD = "zabbix"

SESSION_TERMINATED = {
    "code": -32602,
    "message": "Invalid params.",
    "data": "Session terminated, re-login, please.",
}
BAD_LOGIN = {
    "code": -32602,
    "message": "Invalid params.",
    "data": "Login name or password is incorrect.",
}


class FakeZabbixServer:
    """Transport double that answers like a small Zabbix server"""

    def __init__(self, password: str = ZABBIX_PASSWORD):
        self.password = password
        self.valid_tokens: set[str] = set()
        self.requests: list[dict] = []
        self.urls: list[str] = []
        self.overrides: dict[str, list] = {}
        self.login_result = None

    def post(self, url, body, options):
        request = json.loads(body)
        self.urls.append(url)
        self.requests.append(request)
        method = request["method"]

        queued = self.overrides.get(method)
        if queued:
            reply = queued.pop(0)
            if isinstance(reply, Exception):
                raise reply
            return json.dumps(reply)

        if method == "apiinfo.version":
            return self._result("6.0.25")
        if method == "user.login":
            return self._login(request["params"])
        if request.get("auth") not in self.valid_tokens:
            return self._error(SESSION_TERMINATED)
        if method == "user.logout":
            self.valid_tokens.discard(request["auth"])
            return self._result(True)
        if method == "user.get":
            return self._result([{"userid": "1"}])
        if method == "host.get":
            return self._result([{"hostid": "10084", "host": "Zabbix server"}])
        return self._result([])

    def _login(self, params):
        if params.get("password") != self.password:
            return self._error(BAD_LOGIN)
        if self.login_result is not None:
            return self._result(self.login_result)
        token = uuid.uuid4().hex
        self.valid_tokens.add(token)
        return self._result(token)

    def _result(self, result):
        return json.dumps({"jsonrpc": "2.0", "result": result, "id": 1})

    def _error(self, error):
        return json.dumps({"jsonrpc": "2.0", "error": error, "id": 1})

    def expire_all(self):
        self.valid_tokens.clear()

    def calls(self, method: str) -> list[dict]:
        return [r for r in self.requests if r["method"] == method]


@pytest.fixture
def server():
    return FakeZabbixServer()


@pytest.fixture
def session_options(tmp_path):
    return {"sessionDir": str(tmp_path)}


@pytest.fixture
def client(server):
    return ZabbixClient(transport=server)


@pytest.fixture
def logged_in(client, session_options):
    client.login(ZABBIX_URL, ZABBIX_USER, ZABBIX_PASSWORD, session_options)
    return client
