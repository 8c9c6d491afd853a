"""
Credentials - Signing credentials and the sources they are loaded from

The CredentialProvider owns the process-wide credentials snapshot. Readers
take the fast path; a refresh re-reads the configured source with only one
caller fetching at a time.
"""

import logging
import os
import threading
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from .errors import AuthError

logger = logging.getLogger(__name__)

METADATA_URL = "http://169.254.169.254/latest/meta-data/iam/security-credentials/"
METADATA_TOKEN_URL = "http://169.254.169.254/latest/api/token"
METADATA_TOKEN_TTL = 21600


@dataclass(frozen=True)
class Credentials:
    access_key_id: str
    secret_access_key: str
    session_token: Optional[str] = None


class CredentialSource:
    """Something credentials can be (re)loaded from."""

    def fetch(self) -> Credentials:
        raise NotImplementedError


class StaticCredentialSource(CredentialSource):
    """Fixed keys taken from configuration."""

    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        session_token: Optional[str] = None,
    ):
        self.credentials = Credentials(
            access_key_id, secret_access_key, session_token or None
        )

    def fetch(self) -> Credentials:
        if not self.credentials.access_key_id or not self.credentials.secret_access_key:
            raise AuthError("Static credentials are missing access key id or secret")
        return self.credentials


class EnvironmentCredentialSource(CredentialSource):
    """Reads the standard AWS_* environment variables on every fetch."""

    def fetch(self) -> Credentials:
        access_key_id = os.environ.get("AWS_ACCESS_KEY_ID", "")
        secret_access_key = os.environ.get("AWS_SECRET_ACCESS_KEY", "")
        session_token = os.environ.get("AWS_SESSION_TOKEN") or os.environ.get(
            "AWS_SECURITY_TOKEN"
        )

        if not access_key_id or not secret_access_key:
            raise AuthError(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY must be set"
            )
        return Credentials(access_key_id, secret_access_key, session_token or None)


class InstanceMetadataCredentialSource(CredentialSource):
    """
    Temporary role credentials from the EC2 instance metadata service.

    A session token is requested first (IMDSv2) and sent on every read.
    Instances that still run IMDSv1 answer the token request with 403, 404
    or 405; the reads then go out without a token.
    """

    def __init__(
        self,
        role: Optional[str] = None,
        base_url: str = METADATA_URL,
        token_url: str = METADATA_TOKEN_URL,
        timeout: float = 2,
        session: Optional[requests.Session] = None,
    ):
        self.role = role
        self.base_url = base_url
        self.token_url = token_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _token(self) -> Optional[str]:
        try:
            response = self.session.put(
                self.token_url,
                headers={"X-aws-ec2-metadata-token-ttl-seconds": str(METADATA_TOKEN_TTL)},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise AuthError(f"Instance metadata token request failed: {e}") from e

        if response.status_code in (403, 404, 405):
            logger.debug(f"Metadata token refused with {response.status_code}, using IMDSv1")
            return None

        try:
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise AuthError(f"Instance metadata token request failed: {e}") from e
        return response.text.strip()

    def _get(self, url: str, token: Optional[str]) -> requests.Response:
        headers = {"X-aws-ec2-metadata-token": token} if token else {}
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            return response
        except requests.exceptions.RequestException as e:
            raise AuthError(f"Instance metadata request failed: {e}") from e

    def fetch(self) -> Credentials:
        token = self._token()

        role = self.role
        if not role:
            listing = self._get(self.base_url, token).text.strip()
            if not listing:
                raise AuthError("No IAM role attached to this instance")
            role = listing.splitlines()[0].strip()
            logger.debug(f"Discovered instance role '{role}'")

        try:
            data = self._get(self.base_url + role, token).json()
        except ValueError as e:
            raise AuthError(f"Instance metadata returned invalid JSON: {e}") from e

        if data.get("Code", "Success") != "Success":
            raise AuthError(f"Instance metadata refused credentials: {data.get('Code')}")

        try:
            return Credentials(
                data["AccessKeyId"], data["SecretAccessKey"], data.get("Token")
            )
        except KeyError as e:
            raise AuthError(f"Instance metadata response missing {e}") from e


def build_credential_source(config: Dict) -> CredentialSource:
    """Pick a credential source from the provider configuration."""
    kind = config.get("credentials", "environment")

    if kind == "static":
        return StaticCredentialSource(
            config.get("access_key_id", ""),
            config.get("secret_access_key", ""),
            config.get("session_token"),
        )
    elif kind == "environment":
        return EnvironmentCredentialSource()
    elif kind == "instance":
        return InstanceMetadataCredentialSource(role=config.get("instance_role"))

    raise ValueError(f"Unknown credentials source '{kind}'")


class CredentialProvider:
    """
    Thread-safe holder of the current credentials.

    ``refresh`` is mutually exclusive: while one caller fetches from the
    source, every other caller (readers included) waits. A caller that
    passes the credentials it found stale skips the fetch when someone else
    has already replaced them.
    """

    def __init__(self, source: CredentialSource):
        self.source = source
        self._credentials: Optional[Credentials] = None
        self._refreshing = False
        self._cond = threading.Condition()

    def current(self) -> Credentials:
        """Return the current credentials, loading them on first use."""
        with self._cond:
            while self._refreshing:
                self._cond.wait()
            credentials = self._credentials
        if credentials is not None:
            return credentials
        return self._refresh(expected=None)

    def refresh(self, stale: Optional[Credentials] = None) -> Credentials:
        """
        Fetch new credentials from the source.

        Args:
            stale: The credentials the caller saw rejected. If they have
                already been replaced, the replacement is returned and no
                fetch happens. Without it the fetch is unconditional.

        Raises:
            AuthError: if the source cannot supply credentials. The previous
                credentials stay in place.
        """
        if stale is None:
            return self._refresh(expected=None, force=True)
        return self._refresh(expected=stale)

    def _refresh(self, expected: Optional[Credentials], force: bool = False) -> Credentials:
        with self._cond:
            while self._refreshing:
                self._cond.wait()
            if not force and self._credentials is not expected:
                return self._credentials
            self._refreshing = True

        fresh = None
        try:
            logger.info("Refreshing credentials")
            fresh = self.source.fetch()
        except AuthError:
            raise
        except Exception as e:
            raise AuthError(f"Credential refresh failed: {e}") from e
        finally:
            with self._cond:
                if fresh is not None:
                    self._credentials = fresh
                self._refreshing = False
                self._cond.notify_all()

        return fresh
