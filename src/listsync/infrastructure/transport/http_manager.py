"""REST binding of :class:`IResourceManager` built on ``requests``.

Routes follow ``{base_url}/api/{api_version}/{resource}``::

    GET    /servers                 list
    GET    /servers/<id>            get
    POST   /servers                 create
    PUT    /servers/<id>            update
    PUT    /servers?id=a&id=b       batch update
    POST   /servers/<id>/<action>   perform action
    POST   /servers/<action>?id=... batch perform action
    DELETE /servers/<id>            delete
    DELETE /servers?id=a&id=b       batch delete
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from ...config import API_TOKEN_ENV_VAR, API_URL_ENV_VAR, DEFAULT_API_VERSION, HTTP_TIMEOUT_SEC
from ...domain.models.core import Response
from ...domain.repositories import IResourceManager
from ...errors import ResourceNotFoundError, TransportError

_LOGGER = logging.getLogger(__name__)


def _decode(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpResourceManager(IResourceManager):
    def __init__(
        self,
        resource: str,
        api_version: str = DEFAULT_API_VERSION,
        base_url: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        token: Optional[str] = None,
        timeout: float = HTTP_TIMEOUT_SEC,
    ) -> None:
        if not resource:
            raise ValueError("resource name must not be empty")
        self.resource = resource
        self.api_version = api_version or DEFAULT_API_VERSION
        self.base_url = (base_url or "").rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    @classmethod
    def from_environment(cls, resource: str, api_version: str = DEFAULT_API_VERSION) -> "HttpResourceManager":
        """Build a manager from ``LISTSYNC_API_URL`` / ``LISTSYNC_API_TOKEN``."""
        base_url = os.environ.get(API_URL_ENV_VAR)
        if not base_url:
            raise TransportError(f"{API_URL_ENV_VAR} is not set; cannot bind resource {resource!r}")
        return cls(resource, api_version, base_url, token=os.environ.get(API_TOKEN_ENV_VAR))

    # ------------------------------------------------------------------
    # URL helpers
    # ------------------------------------------------------------------
    def url(self, *parts: Any) -> str:
        segments = [self.base_url, "api", self.api_version, self.resource]
        segments.extend(quote(str(part), safe="") for part in parts)
        return "/".join(segments)

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Response:
        _LOGGER.debug("%s %s params=%s", method, url, params)
        try:
            response = self._session.request(
                method, url, params=params, json=json, timeout=self._timeout
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc
        payload = _decode(response)
        if response.status_code == 404:
            raise ResourceNotFoundError(f"{method} {url}: not found", payload=payload)
        if response.status_code >= 400:
            raise TransportError(
                f"{method} {url} returned {response.status_code}",
                status=response.status_code,
                payload=payload,
            )
        return Response(status=response.status_code, data=payload)

    @staticmethod
    def _unwrap_batch(response: Response) -> Response:
        payload = response.data
        if isinstance(payload, dict) and isinstance(payload.get("data"), list):
            return Response(status=response.status, data=payload["data"])
        return response

    # ------------------------------------------------------------------
    # IResourceManager
    # ------------------------------------------------------------------
    def list(self, params: Optional[Dict[str, Any]] = None, ctx: Any = None) -> Response:
        params = dict(params or {})
        if ctx is not None:
            params.setdefault("ctx", ctx)
        return self._request("GET", self.url(), params=params)

    def get(self, id: Any, params: Optional[Dict[str, Any]] = None) -> Response:
        return self._request("GET", self.url(id), params=params)

    def create(self, data: Optional[Dict[str, Any]] = None) -> Response:
        return self._request("POST", self.url(), json=data or {})

    def update(self, id: Any, data: Optional[Dict[str, Any]] = None) -> Response:
        return self._request("PUT", self.url(id), json=data or {})

    def batch_update(self, ids: List[Any], data: Optional[Dict[str, Any]] = None) -> Response:
        response = self._request("PUT", self.url(), params={"id": list(ids)}, json=data or {})
        return self._unwrap_batch(response)

    def perform_action(self, id: Any, action: str, data: Optional[Dict[str, Any]] = None) -> Response:
        return self._request("POST", self.url(id, action), json=data or {})

    def batch_perform_action(
        self, ids: List[Any], action: str, data: Optional[Dict[str, Any]] = None
    ) -> Response:
        response = self._request("POST", self.url(action), params={"id": list(ids)}, json=data or {})
        return self._unwrap_batch(response)

    def delete(self, id: Any, data: Optional[Dict[str, Any]] = None) -> Response:
        return self._request("DELETE", self.url(id), json=data)

    def batch_delete(self, ids: List[Any], data: Optional[Dict[str, Any]] = None) -> Response:
        return self._request("DELETE", self.url(), params={"id": list(ids)}, json=data)


class HttpManagerFactory:
    """Builds :class:`HttpResourceManager` bindings that share one base URL and session."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url
        self.token = token
        self._session = session

    def __call__(self, resource: str, api_version: str = DEFAULT_API_VERSION) -> HttpResourceManager:
        if not self.base_url:
            return HttpResourceManager.from_environment(resource, api_version)
        return HttpResourceManager(
            resource, api_version, self.base_url, session=self._session, token=self.token
        )


__all__ = ["HttpManagerFactory", "HttpResourceManager"]
