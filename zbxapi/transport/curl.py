"""HTTPS transport built on curl_cffi"""

import logging

from curl_cffi import CurlECode, CurlError, CurlOpt, requests

from ..__version__ import __version__
from ..core.exceptions import TlsError, TransportError
from ..core.types import ClientOptions

logger = logging.getLogger(__name__)

BASE_HEADERS = {
    "Content-Type": "application/json-rpc",
    "User-Agent": f"zbxapi/{__version__}",
    "Accept": "application/json",
}

# curl error codes reported for a certificate or hostname mismatch
TLS_VERIFY_ERRORS = (CurlECode.PEER_FAILED_VERIFICATION, CurlECode.SSL_CACERT_BADFILE)


class CurlTransport:
    """POST JSON-RPC requests over HTTPS, one fresh connection per call"""

    def build_headers(self, options: ClientOptions) -> dict:
        return {
            **BASE_HEADERS,
            "Accept-Encoding": "gzip" if options.use_gzip else "identity",
        }

    def build_curl_options(self, options: ClientOptions) -> dict:
        curl_options = {CurlOpt.FRESH_CONNECT: 1}
        # Hostname checking only applies once the peer itself is verified
        if not options.ssl_verify_host or not options.ssl_verify_peer:
            curl_options[CurlOpt.SSL_VERIFYHOST] = 0
        return curl_options

    def build_verify(self, options: ClientOptions) -> bool | str:
        if not options.ssl_verify_peer:
            return False
        return options.ssl_ca_file or True

    def post(self, url: str, body: str, options: ClientOptions) -> str:
        logger.debug(f"[zbxapi transport] POST {url} ({len(body)} bytes)")

        try:
            with requests.Session(
                curl_options=self.build_curl_options(options)
            ) as session:
                resp = session.post(
                    url,
                    data=body.encode("utf-8"),
                    headers=self.build_headers(options),
                    timeout=(options.connect_timeout, options.timeout),
                    verify=self.build_verify(options),
                    allow_redirects=True,
                )
        except CurlError as e:
            code = getattr(e, "code", 0) or 0
            if options.ssl_verify_peer and code in TLS_VERIFY_ERRORS:
                logger.error(f"[zbxapi transport] TLS verification failed: {e}")
                raise TlsError(ssl_verify_result=int(code), detail=str(e)) from e
            logger.error(f"[zbxapi transport] Request failed: {e}")
            raise TransportError(status=0, detail=str(e)) from e

        if resp.status_code == 0 or resp.status_code >= 400:
            logger.warning(
                f"[zbxapi transport] Failed with status {resp.status_code}"
            )
            raise TransportError(status=resp.status_code, detail=getattr(resp, "reason", "") or "")

        return resp.text
