"""Signed HTTP client for the CLOB REST API."""

import json
from typing import Any, Dict, Optional

import requests

import config
from collectors.signer import sign_request
from config import Credentials


class ClobHTTPError(requests.exceptions.HTTPError):
    """Non-2xx response; carries the status code and response body text."""

    def __init__(self, status_code: int, body: str, response=None):
        super().__init__(f"HTTP {status_code}: {body}", response=response)
        self.status_code = status_code
        self.body = body


class ClobClient:
    """HTTP client that signs every request with the configured credentials.

    One network call per request: no retries, no caching.
    """

    def __init__(
        self,
        creds: Credentials,
        base_url: str = config.CLOB_API_BASE,
        timeout: Optional[float] = config.REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.creds = creds
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout or None
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": "ClobDashboard/1.0",
        })

    def request(
        self,
        path: str,
        method: str = "GET",
        body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Issue a signed request and return the parsed JSON response.

        ``path`` includes the query string; it is signed exactly as sent.
        """
        url = f"{self.base_url}{path}"
        payload = json.dumps(body) if body is not None else ""
        headers = sign_request(self.creds, method, path, payload)

        resp = self.session.request(
            method.upper(), url,
            headers=headers,
            data=payload or None,
            timeout=self.timeout,
        )

        if not resp.ok:
            raise ClobHTTPError(resp.status_code, resp.text, response=resp)
        return resp.json()

    def fork(self) -> "ClobClient":
        """Same credentials and settings on a fresh session, one per worker thread."""
        return ClobClient(self.creds, base_url=self.base_url, timeout=self.timeout)

    def get(self, path: str) -> Any:
        return self.request(path)

    def close(self):
        self.session.close()
