"""
Errors raised by the Route53 request pipeline.

Every failure surfaces to the immediate caller as one of these types.
"""

from typing import Optional


class Route53Error(Exception):
    """Base class for all request pipeline errors."""


class TransportError(Route53Error):
    """The HTTP call itself failed (connection, TLS, timeout)."""


class AuthError(Route53Error):
    """Credentials could not be loaded or refreshed."""


class CodecError(Route53Error):
    """A request body could not be encoded or a response body decoded."""


class UnsupportedResultError(Route53Error):
    """The API returned a result this client refuses to handle, e.g. a truncated list."""


NotSupportedError = UnsupportedResultError


class RemoteError(Route53Error):
    """
    Non-200 response from the API.

    When the body is a well-formed ErrorResponse, ``code`` and ``message``
    carry the provider's values. Otherwise both are empty and ``raw_body``
    holds the undecodable response bytes.
    """

    def __init__(
        self,
        status: int,
        code: str = "",
        message: str = "",
        request_id: str = "",
        raw_body: Optional[bytes] = None,
    ):
        self.status = status
        self.code = code
        self.message = message
        self.request_id = request_id
        self.raw_body = raw_body

        if code:
            text = f"{code}: {message}"
        else:
            body = (raw_body or b"").decode("utf-8", errors="replace")
            text = f"could not parse: {body}"
        super().__init__(text)
