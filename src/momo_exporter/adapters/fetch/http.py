"""HTTP(S) fetch adapter built on httpx."""

import logging
from urllib.parse import urlsplit

import httpx

from momo_exporter.errors import FetchError, UnsupportedSchemeError

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = frozenset({"http", "https"})


class HTTPStatsFetcher:
    """Fetches the Momo stats document over HTTP(S).

    Implements FetchPort. Non-2xx responses, timeouts, connection and TLS
    errors are all reported as FetchError; no retries are attempted.
    """

    def __init__(
        self,
        uri: str,
        ssl_verify: bool = True,
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Validate the URI and prepare the HTTP client.

        Args:
            uri: Absolute http:// or https:// URI of the stats endpoint.
            ssl_verify: Verify the server certificate for https URIs.
            timeout: Timeout in seconds, applied by httpx to each phase of the
                request (connect, read, write and pool acquisition).
            transport: Optional httpx transport (used by tests).

        Raises:
            UnsupportedSchemeError: If the URI scheme is not http or https.
            ValueError: If the URI has no host.
        """
        parts = urlsplit(uri)
        if parts.scheme not in SUPPORTED_SCHEMES:
            raise UnsupportedSchemeError(parts.scheme)
        if not parts.netloc:
            raise ValueError(f"invalid scrape URI: {uri!r}")
        self.uri = uri
        self._client = httpx.Client(
            verify=ssl_verify,
            timeout=timeout,
            transport=transport,
        )

    def fetch(self) -> bytes:
        """GET the stats document.

        Returns:
            The response body.

        Raises:
            FetchError: On any transport failure or non-2xx status.
        """
        try:
            response = self._client.get(self.uri)
        except httpx.HTTPError as exc:
            raise FetchError(f"{type(exc).__name__}: {exc}") from exc
        if not response.is_success:
            raise FetchError(f"HTTP status {response.status_code}")
        return response.content

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()
