from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class ApiError(RuntimeError):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class AuthError(ApiError):
    """The server rejected the bearer token (HTTP 401)."""


def org_path(org_id: int, *parts: Any) -> str:
    tail = "/".join(str(p).strip("/") for p in parts)
    return f"{API_PREFIX}/orgs/{org_id}/{tail}"


def _clean_params(params: Dict[str, Any] | None) -> Dict[str, Any]:
    # Filters are only sent when set; booleans go over the wire as lowercase strings.
    out: Dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None or value == "":
            continue
        out[key] = str(value).lower() if isinstance(value, bool) else value
    return out


def _error_message(resp: requests.Response, fallback: str) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    text = (resp.text or "").strip()
    return text or fallback


class ApiClient:
    """
    Thin JSON client for the Flex ERP REST API.

    Every call follows one contract: non-2xx responses raise ApiError carrying the
    server's error string, 2xx responses return parsed JSON (None for empty bodies).
    There are deliberately no retries.
    """

    def __init__(self, base_url: str, token: Optional[str] = None, *, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Dict[str, Any] | None = None,
        error: str = "Request failed",
    ) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = self.session.request(
                method,
                url,
                json=json,
                params=_clean_params(params),
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(f"{error}: {e}") from e

        if resp.status_code == 401:
            logger.warning("%s %s rejected: unauthorized", method, path)
            raise AuthError(_error_message(resp, "Unauthorized"), status=401)

        if resp.status_code >= 400:
            message = _error_message(resp, error)
            logger.warning("%s %s failed (%s): %s", method, path, resp.status_code, message)
            raise ApiError(message, status=resp.status_code)

        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    def get(self, path: str, *, params: Dict[str, Any] | None = None, error: str = "Request failed") -> Any:
        return self.request("GET", path, params=params, error=error)

    def post(self, path: str, *, json: Any = None, error: str = "Request failed") -> Any:
        return self.request("POST", path, json=json, error=error)

    def patch(self, path: str, *, json: Any = None, error: str = "Request failed") -> Any:
        return self.request("PATCH", path, json=json, error=error)

    def put(self, path: str, *, json: Any = None, error: str = "Request failed") -> Any:
        return self.request("PUT", path, json=json, error=error)

    def delete(self, path: str, *, error: str = "Request failed") -> Any:
        return self.request("DELETE", path, error=error)

    # ----------------------------
    # Unscoped endpoints
    # ----------------------------

    def login(self, email: str, password: str) -> dict:
        data = self.post("/auth/login", json={"email": email, "password": password}, error="Login failed")
        if not isinstance(data, dict) or not data.get("token"):
            raise ApiError("Login response missing token")
        return data

    def health(self) -> dict:
        return self.get("/health", error="Health check failed")
