# statusdog/api_client.py
# DESIGNER'S NOTE:
# This file is the "service layer". It encapsulates every HTTP request to the list backend and to the
# image service, translating network-level failures into the exceptions of errors.py so the handlers
# never deal with requests directly.

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Iterable

import requests

from .config import AUTH_HEADER, AppConfig
from .errors import AuthError, TransportError, ValidationError
from .models import SavedList, StatusCode

logger = logging.getLogger(__name__)


def _error_detail(response: requests.Response | None) -> str:
    """Best-effort human readable reason from a failed backend reply."""
    if response is None:
        return "no response"
    try:
        body = response.json()
    except (json.JSONDecodeError, ValueError):
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "message", "detail", "error"):
            if body.get(key):
                return str(body[key])
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            return "; ".join(str(e.get("msg", e)) if isinstance(e, dict) else str(e) for e in errors)
    return response.text or f"HTTP {response.status_code}"


class _BackendClient:
    def __init__(self, config: AppConfig, session: requests.Session | None = None):
        self._config = config
        self._session = session or requests.Session()

    def _request(self, method: str, url: str, *, headers: dict | None = None, payload: Any = None) -> Any:
        try:
            response = self._session.request(method, url, headers=headers, json=payload)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            detail = _error_detail(e.response)
            logger.error(f"{method} {url} failed with HTTP {status}: {detail}")
            if status in (401, 403):
                raise AuthError(detail, status_code=status) from e
            raise TransportError(detail, status_code=status) from e
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(f"Cannot reach the backend: {e}") from e

        if not response.content:
            return {}
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError):
            return {"message": response.text}


class AuthClient(_BackendClient):
    """Unauthenticated endpoints: login, registration, health check."""

    def check_backend(self) -> str:
        try:
            response = self._session.get(self._config.ROOT_URL, timeout=2)
            if response.ok:
                return "🟢 Backend reachable"
            return f"🟡 Backend answered with status {response.status_code}"
        except requests.RequestException:
            return "🔴 Backend not reachable"

    def login(self, email: str, password: str) -> str:
        logger.info(f"Logging in as {email}")
        body = self._request("POST", self._config.LOGIN_URL, payload={"email": email, "password": password})
        token = body.get("token") if isinstance(body, dict) else None
        if not token:
            raise TransportError("Login succeeded but the backend returned no token.")
        return token

    def register(self, name: str, email: str, password: str) -> dict:
        logger.info(f"Registering account for {email}")
        body = self._request(
            "POST", self._config.REGISTER_URL,
            payload={"name": name, "email": email, "password": password},
        )
        return body if isinstance(body, dict) else {"result": body}


class ListServiceClient(_BackendClient):
    """The four list operations. Every call carries the token in the x-auth-token header."""

    def __init__(self, config: AppConfig, token_provider: Callable[[], str | None],
                 session: requests.Session | None = None):
        super().__init__(config, session)
        self._token_provider = token_provider

    def _auth_headers(self) -> dict:
        token = self._token_provider()
        if not token:
            raise AuthError("You are not logged in.")
        return {AUTH_HEADER: token}

    def fetch_lists(self) -> list[SavedList]:
        headers = self._auth_headers()
        logger.info("Fetching saved lists")
        body = self._request("GET", self._config.GET_LISTS_URL, headers=headers)
        raw_lists = body.get("lists") if isinstance(body, dict) else None
        return [SavedList.from_dict(item) for item in raw_lists or [] if isinstance(item, dict)]

    def save_list(self, name: str, codes: Iterable[StatusCode]) -> SavedList | None:
        name = (name or "").strip()
        if not name:
            raise ValidationError("List name is required.")
        headers = self._auth_headers()
        codes = list(codes)
        logger.info(f"Saving list '{name}' with {len(codes)} code(s)")
        body = self._request("POST", self._config.SAVE_LIST_URL, headers=headers,
                             payload={"name": name, "codes": codes})
        return _saved_list_from(body)

    def delete_list(self, list_id: str) -> dict:
        headers = self._auth_headers()
        logger.info(f"Deleting list with id: {list_id}")
        body = self._request("DELETE", self._config.list_url(list_id), headers=headers)
        return body if isinstance(body, dict) else {}

    def delete_item(self, list_id: str, code: StatusCode) -> SavedList | None:
        headers = self._auth_headers()
        logger.info(f"Deleting item with code: {code} from list with id: {list_id}")
        body = self._request("PUT", self._config.delete_item_url(list_id), headers=headers,
                             payload={"code": code})
        return _saved_list_from(body)


def _saved_list_from(body: Any) -> SavedList | None:
    # Some backend versions wrap the document as {"list": {...}}
    if isinstance(body, dict) and isinstance(body.get("list"), dict):
        body = body["list"]
    if isinstance(body, dict) and (body.get("_id") or body.get("id")):
        return SavedList.from_dict(body)
    return None


# Seconds during which probes are skipped after the image service could not be reached
PROBE_RETRY_SECONDS = 60


class ImageResolver:
    """
    Picks the image URL shown for a status code.
    The image service is probed once per URL; when it fails, the item's alternate link is used,
    then the generic placeholder. When the service itself is unreachable, probing pauses for
    PROBE_RETRY_SECONDS so a render never waits on more than one timeout.
    """

    def __init__(self, config: AppConfig, session: requests.Session | None = None):
        self._config = config
        self._session = session or requests.Session()
        self._available: dict[str, bool] = {}
        self._unreachable_since: float | None = None

    def _is_available(self, url: str) -> bool:
        if url in self._available:
            return self._available[url]
        if self._unreachable_since is not None:
            if time.monotonic() - self._unreachable_since < PROBE_RETRY_SECONDS:
                return False
            self._unreachable_since = None
        try:
            response = self._session.head(url, allow_redirects=True, timeout=5)
        except requests.RequestException as e:
            logger.warning(f"Image service unreachable ({e}), not probing again for {PROBE_RETRY_SECONDS}s")
            self._unreachable_since = time.monotonic()
            return False
        self._available[url] = response.ok
        if not response.ok:
            logger.info(f"No image at {url}, using fallback")
        return response.ok

    def resolve(self, code: StatusCode, alternate: str | None = None) -> str:
        url = self._config.image_url(code)
        if self._is_available(url):
            return url
        return alternate or self._config.PLACEHOLDER_IMAGE
