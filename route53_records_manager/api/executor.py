"""
Request Executor - Runs one Request against the Route53 API

Builds the URL, signs, encodes the body, performs the HTTP call and
classifies the response. A 403 on the first attempt is taken as a sign of
stale credentials: the credentials are refreshed and the request is sent
once more, and that second outcome is what the caller gets.
"""

import logging
import sys
import threading
from typing import Optional, Tuple, Union

import requests

from .credentials import CredentialProvider, Credentials
from .errors import CodecError, RemoteError, TransportError
from .models import Request
from .signer import sign
from .xml_codec import decode_error, decode_response, encode_change_batch

logger = logging.getLogger(__name__)

TRACE_LOGGER = "route53_records_manager.trace"
TRACE_HANDLER = "route53-trace"
trace = logging.getLogger(TRACE_LOGGER)

DEFAULT_ENDPOINT = "https://route53.amazonaws.com"
DEFAULT_API_VERSION = "2012-12-12"

Timeout = Union[float, Tuple[float, float], None]


def enable_trace(stream=None):
    """Write raw requests and responses to stderr. Safe to call repeatedly."""
    if any(handler.get_name() == TRACE_HANDLER for handler in trace.handlers):
        return

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(TRACE_HANDLER)
    handler.setFormatter(logging.Formatter("%(message)s"))
    trace.addHandler(handler)
    trace.setLevel(logging.DEBUG)
    trace.propagate = False


class RequestExecutor:
    """
    Executes Requests synchronously on the calling thread.

    requests does not promise that a Session is thread-safe, so unless one
    is passed in, each calling thread gets its own Session. A Session passed
    in is used by every thread and must be safe for that.
    """

    def __init__(
        self,
        credentials: CredentialProvider,
        endpoint: str = DEFAULT_ENDPOINT,
        api_version: str = DEFAULT_API_VERSION,
        include_weight: bool = False,
        debug: bool = False,
        timeout: Timeout = None,
        session: Optional[requests.Session] = None,
    ):
        self.credentials = credentials
        self.endpoint = endpoint.rstrip("/")
        self.api_version = api_version
        self.include_weight = include_weight
        self.debug = debug
        self.timeout = timeout
        self._session = session
        self._local = threading.local()

        if debug:
            enable_trace()

    @property
    def session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def url(self, request: Request) -> str:
        return f"{self.endpoint}/{self.api_version}{request.path}"

    def execute(self, request: Request, timeout: Timeout = None):
        """
        Run a request and return the decoded response for its shape.

        Args:
            request: The call to make
            timeout: Per-attempt transport timeout in seconds (or a
                (connect, read) tuple); defaults to the executor's timeout

        Raises:
            TransportError: the HTTP call failed
            AuthError: credentials could not be loaded or refreshed
            RemoteError: non-200 status after at most one retry
            CodecError: the body could not be encoded or decoded
        """
        timeout = timeout if timeout is not None else self.timeout
        credentials = self.credentials.current()
        status, body = self._send(request, credentials, timeout)

        if status == 403:
            logger.info(f"{request.method} {request.path} forbidden, refreshing credentials and retrying")
            credentials = self.credentials.refresh(stale=credentials)
            status, body = self._send(request, credentials, timeout)

        return self._handle(request, status, body)

    def _send(
        self, request: Request, credentials: Credentials, timeout: Timeout
    ) -> Tuple[int, bytes]:
        url = self.url(request)
        headers = sign(request.method, request.path, credentials)
        data = None

        if request.body is not None:
            data = encode_change_batch(request.body, include_weight=self.include_weight)
            headers["Content-Type"] = "text/xml"

        if self.debug:
            trace.debug(f"-- request\n{request.method} {url} params={request.params}")
            if data is not None:
                trace.debug(f"-- body\n{data.decode('utf-8')}")

        try:
            response = self.session.request(
                request.method,
                url,
                params=request.params,
                data=data,
                headers=headers,
                timeout=timeout,
            )
            body = response.content
        except requests.exceptions.RequestException as e:
            logger.error(f"{request.method} {url} failed: {e}")
            raise TransportError(f"{request.method} {url} failed: {e}") from e

        if self.debug:
            trace.debug(f"-- response\n{response.status_code}\n{body.decode('utf-8', errors='replace')}")

        return response.status_code, body

    def _handle(self, request: Request, status: int, body: bytes):
        if status == 200:
            try:
                return decode_response(request.shape, body)
            except CodecError:
                if self.debug:
                    trace.debug(f"-- error unmarshalling\n{body!r}")
                raise

        try:
            error = decode_error(body)
        except CodecError as e:
            logger.debug(f"Undecodable error body for status {status}: {e}")
            raise RemoteError(status, raw_body=body) from e

        logger.warning(f"{request.method} {request.path} returned {status}: {error.code}")
        raise RemoteError(
            status,
            code=error.code,
            message=error.message,
            request_id=error.request_id,
            raw_body=body,
        )
