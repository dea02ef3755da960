"""HMAC-SHA256 request signing for the CLOB REST API."""

import base64
import hashlib
import hmac
import time
from typing import Dict, Optional

from config import Credentials


def build_signature(secret: str, timestamp: int, method: str, path: str,
                    body: str = "") -> str:
    """Sign ``timestamp + METHOD + path + body`` with the base64-decoded secret.

    The pieces are concatenated with no delimiters; path includes the query
    string. Returns the digest base64-encoded.
    """
    key = base64.b64decode(secret)
    message = f"{timestamp}{method.upper()}{path}{body}"
    digest = hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def sign_request(
    creds: Credentials,
    method: str,
    path: str,
    body: str = "",
    timestamp: Optional[int] = None,
) -> Dict[str, str]:
    """Build the authenticated header set for one request."""
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "X-BAPI-TIMESTAMP": str(timestamp),
        "X-BAPI-API-KEY": creds.api_key,
        "X-BAPI-SIGN": build_signature(creds.api_secret, timestamp, method, path, body),
        "X-BAPI-PASSPHRASE": creds.api_passphrase,
    }
