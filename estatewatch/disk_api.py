"""Minimal client for the Yandex Disk REST API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urljoin

import requests

from .errors import DiskApiError

logger = logging.getLogger(__name__)

DISK_API_BASE = "https://cloud-api.yandex.net/v1/disk/"
LIST_LIMIT = 1000
DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class DiskResource:
    """A file or directory entry returned by the resources endpoint."""

    name: str
    path: str
    type: str
    file: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return self.type == "file"


class DiskClient:
    """Thin wrapper around the disk API using OAuth token authentication."""

    def __init__(
        self,
        token: str,
        session: requests.Session | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        if not token:
            raise ValueError("Disk API token must not be empty")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"OAuth {token}",
            "Accept": "application/json",
        })

    def list_resources(self, folder: str) -> List[DiskResource]:
        """Return every entry directly under ``folder``, across all pages."""
        resources: List[DiskResource] = []
        offset = 0
        while True:
            payload = self._get_json(
                "resources",
                params={
                    "path": folder,
                    "limit": str(LIST_LIMIT),
                    "offset": str(offset),
                },
            )
            embedded = payload.get("_embedded") or {}
            items = embedded.get("items") or []
            for item in items:
                resources.append(_parse_resource(item, folder))

            offset += len(items)
            total = embedded.get("total")
            if len(items) < LIST_LIMIT:
                break
            if isinstance(total, int) and offset >= total:
                break
        logger.debug("Listed %d resources under %s", len(resources), folder)
        return resources

    def upload(self, path: str, data: bytes) -> None:
        """Create a new file at ``path``; the API refuses to overwrite."""
        href = self._get_href("resources/upload",
                              params={"path": path, "overwrite": "false"})
        response = self._request("PUT", href, data=data)
        logger.debug("Uploaded %d bytes to %s (HTTP %d)", len(data), path,
                     response.status_code)

    def download(self, path: str) -> bytes:
        href = self._get_href("resources/download", params={"path": path})
        response = self._request("GET", href)
        return response.content

    def _get_href(self, endpoint: str, params: dict) -> str:
        payload = self._get_json(endpoint, params=params)
        href = payload.get("href")
        if not href:
            raise DiskApiError(
                f"Response from {endpoint} carries no href: {payload!r}")
        return href

    def _get_json(self, endpoint: str, params: dict) -> dict:
        response = self._request("GET", urljoin(DISK_API_BASE, endpoint),
                                 params=params)
        try:
            payload = response.json()
        except ValueError as exc:
            raise DiskApiError(
                f"Actual server response: {response.text!r}",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, dict):
            raise DiskApiError(f"Unexpected response payload: {payload!r}")
        return payload

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            response = self.session.request(method,
                                            url,
                                            timeout=self.timeout,
                                            **kwargs)
        except requests.RequestException as exc:
            raise DiskApiError(f"{method} {url} failed: {exc}") from exc
        if response.status_code >= 400:
            raise DiskApiError(
                f"{method} {url} returned HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return response


def _parse_resource(item: dict, folder: str) -> DiskResource:
    try:
        return DiskResource(
            name=item["name"],
            path=item.get("path", ""),
            type=item["type"],
            file=item.get("file"),
        )
    except (KeyError, TypeError) as exc:
        raise DiskApiError(
            f"Malformed resource entry in {folder!r}: {item!r}") from exc
