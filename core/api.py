"""
REST gateway for the training-management backend.

One ResourceGateway per collection:
- GET    {resource}          -> list
- POST   {resource}          -> create
- PUT    {resource}/{id}     -> update (full record replace)
- DELETE {resource}/{id}     -> delete
- POST   {resource}/bulk     -> bulk create (evaluations)

Every transport or HTTP-status failure is raised as ApiError. Nothing is retried.
"""
from __future__ import annotations

import logging
from typing import Any

import requests

from core.settings import Settings, load_settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised for any failed call against the REST API."""


def new_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    return session


def _decode(resp: requests.Response) -> Any:
    # An empty or non-JSON body is not an error; list callers treat it as "no records".
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return None


class ResourceGateway:
    """Thin list/create/update/delete client for one REST collection."""

    def __init__(
        self,
        resource: str,
        session: requests.Session | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or load_settings()
        self.resource = "/" + resource.strip("/")
        self.base_url = settings.api.base_url.rstrip("/")
        self.timeout = settings.api.timeout_seconds
        self.session = session or new_session()

    def _url(self, suffix: str = "") -> str:
        return f"{self.base_url}{self.resource}{suffix}"

    def _request(self, method: str, suffix: str = "", payload: Any = None) -> Any:
        url = self._url(suffix)
        try:
            resp = self.session.request(method, url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise ApiError(f"{method} {self.resource}{suffix} failed: {e}") from e
        logger.debug(f"{method} {url} -> {resp.status_code}")
        return _decode(resp)

    def list(self) -> Any:
        return self._request("GET")

    def create(self, record: dict[str, Any]) -> Any:
        return self._request("POST", payload=record)

    def update(self, record_id: str, record: dict[str, Any]) -> Any:
        return self._request("PUT", f"/{record_id}", payload=record)

    def delete(self, record_id: str) -> Any:
        return self._request("DELETE", f"/{record_id}")

    def bulk_create(self, records: list[dict[str, Any]]) -> Any:
        return self._request("POST", "/bulk", payload=records)
