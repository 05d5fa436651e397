"""JSON-RPC 2.0 envelope shaping for the Zabbix API"""

import json
import logging
from typing import Any

from ..core.exceptions import DecodeError, RemoteApiError
from ..core.types import UNAUTHENTICATED_METHODS

logger = logging.getLogger(__name__)

# Calls are strictly sequential, so a single id is enough
REQUEST_ID = 1


class JsonRpcCodec:
    """Encode Zabbix calls as JSON-RPC 2.0 requests and decode the replies"""

    def build_request(self, method: str, params: Any = None, auth: str = "") -> dict:
        """Request object; 'auth' is left out entirely for unauthenticated methods"""
        request = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params if isinstance(params, (dict, list)) else {},
            "id": REQUEST_ID,
            "auth": auth,
        }
        if method in UNAUTHENTICATED_METHODS:
            del request["auth"]
        return request

    def encode(self, method: str, params: Any = None, auth: str = "") -> str:
        return json.dumps(self.build_request(method, params, auth), ensure_ascii=False)

    def decode(self, raw: str) -> Any:
        try:
            response = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.debug(f"[zbxapi codec] JSON parse failed: {e}")
            raise DecodeError(raw=raw) from e

        if not isinstance(response, dict):
            raise DecodeError(raw=raw)

        if response.get("id") == REQUEST_ID and "result" in response:
            return response["result"]

        error = response.get("error")
        if isinstance(error, dict):
            raise RemoteApiError(
                code=error.get("code", 0),
                message=error.get("message", ""),
                data=error.get("data"),
            )

        raise DecodeError(raw=raw)
