"""HTTP client for the PHP REST backend.

Endpoints answer either with a bare JSON document or with an envelope of the
form ``{"success": bool, "data": ..., "message": str}``.
"""

import logging
import os
from decimal import Decimal
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class BackendError(Exception):
    """Request to the backend failed or the backend reported failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def unwrap_envelope(payload: Any) -> Any:
    """Return the data of a success envelope; other documents pass through.

    Raises:
        BackendError: If the envelope reports failure
    """
    if isinstance(payload, dict) and "success" in payload:
        if not payload["success"]:
            raise BackendError(payload.get("message") or payload.get("error") or "Request failed")
        return payload.get("data")
    return payload


def to_json_compatible(value: Any) -> Any:
    """Convert Decimals (also nested in dicts, lists and tuples) to floats."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {k: to_json_compatible(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_compatible(v) for v in value]
    return value


class ApiClient:
    """Thin wrapper around an httpx.Client bound to the backend base URL."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Backend root, e.g. "https://example.org"
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    @classmethod
    def from_env(cls, transport: Optional[httpx.BaseTransport] = None) -> "ApiClient":
        """Build a client from FINBOARD_API_URL and FINBOARD_API_TIMEOUT.

        Raises:
            BackendError: If FINBOARD_API_URL is not set
        """
        base_url = os.environ.get("FINBOARD_API_URL")
        if not base_url:
            raise BackendError("FINBOARD_API_URL is not set")
        timeout = float(os.environ.get("FINBOARD_API_TIMEOUT", DEFAULT_TIMEOUT))
        return cls(base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get(self, path: str, params: Optional[dict] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, data: Any = None, params: Optional[dict] = None) -> Any:
        return self.request("POST", path, params=params, json=data if data is not None else {})

    def put(self, path: str, data: Any = None, params: Optional[dict] = None) -> Any:
        return self.request("PUT", path, params=params, json=data if data is not None else {})

    def delete(self, path: str, params: Optional[dict] = None) -> Any:
        return self.request("DELETE", path, params=params)

    def request(self, method: str, path: str, params: Optional[dict] = None, json: Any = None) -> Any:
        """Send a request and return the unwrapped payload.

        Query parameters with a None value are omitted.

        Raises:
            BackendError: On transport errors, HTTP error statuses, invalid
                JSON or a failed envelope
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("%s %s params=%s", method, path, query)
        try:
            response = self._client.request(
                method,
                path,
                params=query,
                json=to_json_compatible(json) if json is not None else None,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.error("%s %s failed with %s: %s", method, path, e.response.status_code, message)
            raise BackendError(message, status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise BackendError(f"Request to {path} failed: {e}") from e

        if not response.content:
            return None
        try:
            payload = response.json()
        except ValueError as e:
            raise BackendError(f"Invalid JSON from {path}", status_code=response.status_code) from e
        return unwrap_envelope(payload)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or f"HTTP {response.status_code}")
    return f"HTTP {response.status_code}"
