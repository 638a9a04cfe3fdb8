# core/client.py
"""
HTTP transport for the countriesnow.space API.
One request per call: no retries, no caching, fixed timeout.
"""

import json
import time
import logging
import threading
from typing import Optional, Dict, Any
from urllib.parse import quote

import requests

from config import BASE_URL, REQUEST_TIMEOUT, JSON_CONTENT_TYPE
from core.errors import TransportError
from utils import get_session

logger = logging.getLogger("countries.client")

SUPPORTED_METHODS = ("GET", "POST")


def build_query(path: str, **params: str) -> str:
    """
    Append percent-encoded query parameters to a path.

    Spaces become %20 (not '+'), which is what the API expects for
    country names like "Czech Republic".
    """
    if not params:
        return path
    query = "&".join(f"{key}={quote(str(value), safe='')}" for key, value in params.items())
    return f"{path}?{query}"


class APIClient:
    """
    Thin GET/POST client bound to a single base URL.

    Usage:
        with APIClient() as client:
            body = client.get(build_query("cities/q", country="Czech Republic"))
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else get_session()
        self._api_calls = 0
        self._lock = threading.Lock()

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.session.close()

    @property
    def api_calls(self) -> int:
        return self._api_calls

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    #  MAIN ENTRY POINT
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def fetch(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        """
        Issue one request and return the parsed JSON body.

        Args:
            method: "GET" or "POST"
            path: Path relative to the base URL, query string included
            body: JSON object sent with POST requests

        Returns:
            Parsed JSON (dict / list tree)

        Raises:
            TransportError: connection failure, timeout, non-2xx status,
                or a body that is not valid JSON
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported method {method!r}, expected one of {SUPPORTED_METHODS}")

        url = self._url(path)
        kwargs: Dict[str, Any] = {"timeout": self.timeout}
        if method == "POST":
            kwargs["data"] = json.dumps(body if body is not None else {}).encode("utf-8")
            kwargs["headers"] = {"Content-Type": JSON_CONTENT_TYPE}

        with self._lock:
            self._api_calls += 1

        t0 = time.time()
        try:
            r = self.session.request(method, url, **kwargs)
        except requests.Timeout as e:
            logger.warning("%s %s timed out after %.1fs", method, url, self.timeout)
            raise TransportError(f"Request timed out after {self.timeout:.0f}s: {method} {url}", url=url) from e
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise TransportError(f"Request failed: {method} {url}: {e}", url=url) from e

        elapsed = time.time() - t0
        logger.debug("%s %s → %s (%.2fs)", method, url, r.status_code, elapsed)

        if not 200 <= r.status_code < 300:
            logger.warning("%s %s → HTTP %s: %s", method, url, r.status_code, r.text[:200])
            raise TransportError(
                f"Unexpected HTTP status {r.status_code} for {method} {url}",
                url=url,
                status_code=r.status_code,
            )

        try:
            return r.json()
        except ValueError as e:
            raise TransportError(f"Response from {url} is not valid JSON", url=url, status_code=r.status_code) from e

    def get(self, path: str) -> Any:
        return self.fetch("GET", path)

    def post(self, path: str, body: Dict[str, Any]) -> Any:
        return self.fetch("POST", path, body)

    def download(self, url: str) -> bytes:
        """Fetch raw bytes from an absolute URL (used for flag images)."""
        try:
            r = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Download failed: {url}: {e}", url=url) from e

        if not 200 <= r.status_code < 300:
            raise TransportError(
                f"Unexpected HTTP status {r.status_code} for GET {url}",
                url=url,
                status_code=r.status_code,
            )
        return r.content

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    #  HELPERS
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"
