"""Transport protocol"""

from typing import Protocol

from ..core.types import ClientOptions


class Transport(Protocol):
    """Protocol for sending an encoded request to the API endpoint"""

    def post(self, url: str, body: str, options: ClientOptions) -> str:
        """
        POST body to url and return the raw response text.
        Raises TransportError / TlsError on failure.
        """
        ...
