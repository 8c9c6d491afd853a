"""
Request signing for the Route53 API (AWS3-HTTPS scheme).

The signature is an HMAC-SHA256 of the Date header keyed with the secret
access key. The body is never read.
"""

import base64
import hashlib
import hmac
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Dict, Optional

from .credentials import Credentials


def http_date(when: Optional[datetime] = None) -> str:
    """Format a timestamp the way the Date header expects it (RFC 1123, GMT)."""
    when = when or datetime.now(timezone.utc)
    return format_datetime(when.astimezone(timezone.utc), usegmt=True)


def signature(secret_access_key: str, date: str) -> str:
    digest = hmac.new(
        secret_access_key.encode("utf-8"), date.encode("utf-8"), hashlib.sha256
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def sign(
    method: str,
    path: str,
    credentials: Credentials,
    date: Optional[str] = None,
) -> Dict[str, str]:
    """
    Build the authentication headers for one request.

    AWS3-HTTPS signs the Date header alone, so the headers do not depend on
    ``method`` or ``path``. Both are taken so that a signer covering the
    request line can be dropped in without touching the executor.

    Args:
        method: HTTP verb of the request (not part of the signature)
        path: Request path (not part of the signature)
        credentials: Snapshot to sign with
        date: Date header value; defaults to now

    Returns:
        Headers to merge into the outbound request
    """
    date = date or http_date()
    headers = {
        "Date": date,
        "X-Amzn-Authorization": (
            f"AWS3-HTTPS AWSAccessKeyId={credentials.access_key_id},"
            f"Algorithm=HmacSHA256,"
            f"Signature={signature(credentials.secret_access_key, date)}"
        ),
    }
    if credentials.session_token:
        headers["X-Amz-Security-Token"] = credentials.session_token
    return headers
