"""HTTP client for the kitchen backend API.

Thin wrapper around ``requests``: it adds the base URL, the JSON headers
and the bearer token, and turns every failure into an ``ApiError``.
Retries are left to the caller.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A request to the backend failed.

    ``status`` is the HTTP status code, or 0 when no response arrived.
    """

    def __init__(self, status: int, status_text: str, response: str = "") -> None:
        super().__init__(f"API Error: {status} {status_text}")
        self.status = status
        self.status_text = status_text
        self.response = response

    def is_unauthorized(self) -> bool:
        return self.status == 401

    def is_forbidden(self) -> bool:
        return self.status == 403

    def is_not_found(self) -> bool:
        return self.status == 404

    def is_validation_error(self) -> bool:
        return self.status == 422

    def is_server_error(self) -> bool:
        return self.status >= 500

    def validation_errors(self) -> list:
        if not self.is_validation_error():
            return []
        try:
            payload = json.loads(self.response)
        except ValueError:
            return []
        if isinstance(payload, dict):
            payload = payload.get("detail", [])
        return payload if isinstance(payload, list) else []


class ApiClient:

    def __init__(
        self,
        base_url: str = "http://localhost:8000/api/v1",
        token: str | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._session = session or requests.Session()

    def set_auth_token(self, token: str) -> None:
        self._token = token

    def clear_auth_token(self) -> None:
        self._token = None

    # --- Verbs ----------------------------------------------------------------

    def get(self, endpoint: str) -> Any:
        return self._request("GET", endpoint)

    def post(self, endpoint: str, data: Any = None) -> Any:
        return self._request("POST", endpoint, data)

    def put(self, endpoint: str, data: Any = None) -> Any:
        return self._request("PUT", endpoint, data)

    def patch(self, endpoint: str, data: Any = None) -> Any:
        return self._request("PATCH", endpoint, data)

    def delete(self, endpoint: str) -> Any:
        return self._request("DELETE", endpoint)

    # --- Internal helpers -----------------------------------------------------

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _request(self, method: str, endpoint: str, data: Any = None) -> Any:
        url = f"{self._base_url}{endpoint}"
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                headers=self._headers(),
                json=data,
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout as exc:
            raise ApiError(0, "Network Error", f"Timed out after {self._timeout}s") from exc
        except requests.exceptions.RequestException as exc:
            raise ApiError(0, "Network Error", str(exc)) from exc

        if not response.ok:
            logger.debug("%s %s -> %s", method, url, response.status_code)
            raise ApiError(response.status_code, response.reason or "", response.text)

        if "application/json" in response.headers.get("Content-Type", ""):
            return response.json()
        return {}
