"""Request codec protocol"""

from typing import Any, Protocol


class RequestCodec(Protocol):
    """Protocol for encoding calls and decoding responses"""

    def encode(self, method: str, params: Any, auth: str) -> str:
        """Build the request body for a single call"""
        ...

    def decode(self, raw: str) -> Any:
        """
        Return the call result. Raises RemoteApiError for an error response
        and DecodeError for anything unrecognizable.
        """
        ...
