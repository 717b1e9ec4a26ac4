"""
Section Store -- HTTP client for the /homepage-sections resource.

Used by the section editor and by scripts that manage the homepage from
outside the web app.

Configuration:
    VSM_API_URL env var or fallback to http://localhost:5000/api/v1
"""

from __future__ import annotations

import logging
import mimetypes
import os
from datetime import datetime
from typing import Any, BinaryIO, Dict, Iterable, List, Optional, Union

import httpx

from vsm.sections.section import Section
from .errors import (
    AuthorizationError,
    ConflictError,
    NetworkError,
    NotFoundError,
    ServerError,
    ValidationFailure,
)
from .token_store import TokenStore

logger = logging.getLogger(__name__)

API_URL = os.environ.get("VSM_API_URL", "http://localhost:5000/api/v1")
TIMEOUT = 10.0
GET_RETRIES = 1

IMAGE_SLOTS = ("hero", "story")


def _error_message(response: httpx.Response, body: Any) -> str:
    if isinstance(body, dict):
        # Our handlers use "message", flask-jwt-extended uses "msg"
        for key in ("message", "msg", "error"):
            if body.get(key):
                return str(body[key])
    return f"{response.status_code} {response.reason_phrase}".strip()


def raise_for_status(response: httpx.Response) -> None:
    """Map an error response onto the StoreError hierarchy."""
    if response.is_success:
        return

    try:
        body = response.json()
    except ValueError:
        body = None

    message = _error_message(response, body)
    status = response.status_code

    if status in (400, 422):
        fields = body.get("fields") if isinstance(body, dict) else None
        raise ValidationFailure(message, status, body, fields=fields)
    if status in (401, 403):
        raise AuthorizationError(message, status, body)
    if status == 404:
        raise NotFoundError(message, status, body)
    if status == 409:
        raise ConflictError(message, status, body)
    raise ServerError(message, status, body)


class SectionStore:
    """Synchronous client for homepage sections."""

    def __init__(
        self,
        base_url: str = API_URL,
        *,
        token_store: Optional[TokenStore] = None,
        timeout: float = TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token_store = token_store or TokenStore()
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SectionStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _auth_headers(self) -> Dict[str, str]:
        token = self._token_store.load()
        if not token:
            raise AuthorizationError("Not signed in: no access token available")
        return {"Authorization": f"Bearer {token}"}

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        # Reads are idempotent: one retry on transport failure
        attempts = GET_RETRIES + 1
        for attempt in range(1, attempts + 1):
            try:
                response = self._client.get(path, params=params)
                break
            except httpx.TransportError as e:
                if attempt == attempts:
                    raise NetworkError(f"Could not reach the server: {e}") from e
                logger.warning("GET %s failed (%s), retrying", path, e)

        raise_for_status(response)
        return response.json()

    def _send(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        files: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        # Writes are never retried here; the caller decides
        all_headers = self._auth_headers()
        all_headers.update(headers or {})
        try:
            response = self._client.request(method, path, json=json, files=files, headers=all_headers)
        except httpx.TransportError as e:
            raise NetworkError(f"Could not reach the server: {e}") from e

        raise_for_status(response)
        return response

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_sections(self, homepage_id: Optional[str] = None) -> List[Section]:
        params = {"homepageId": homepage_id} if homepage_id else None
        return [Section.from_dict(item) for item in self._get("/homepage-sections", params)]

    def list_sections_by_type(self, section_type: str, homepage_id: Optional[str] = None) -> List[Section]:
        params = {"homepageId": homepage_id} if homepage_id else None
        items = self._get(f"/homepage-sections/types/{section_type}", params)
        return [Section.from_dict(item) for item in items]

    def get_section(self, section_id: str) -> Section:
        return Section.from_dict(self._get(f"/homepage-sections/{section_id}"))

    def get_hero_section(self) -> Optional[Section]:
        try:
            return Section.from_dict(self._get("/homepage-sections/hero"))
        except NotFoundError:
            return None

    def catalog(self) -> List[Dict[str, Any]]:
        return self._get("/homepage-sections/catalog")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_section(self, data: Dict[str, Any]) -> Section:
        """
        Create a section. The server assigns id and order; any id or
        order in `data` is ignored.
        """
        payload = {k: v for k, v in data.items() if k not in ("id", "order")}
        response = self._send("POST", "/homepage-sections", json=payload)
        return Section.from_dict(response.json())

    def update_section(
        self,
        section_id: str,
        changes: Dict[str, Any],
        *,
        if_unmodified_since: Optional[datetime] = None,
    ) -> Section:
        """
        Partial update. `sectionData`, when present, replaces the stored
        payload entirely, so send the full merged object.
        """
        headers = {}
        if if_unmodified_since is not None:
            headers["If-Unmodified-Since"] = if_unmodified_since.isoformat()

        response = self._send("PUT", f"/homepage-sections/{section_id}", json=changes, headers=headers)
        return Section.from_dict(response.json())

    def update_hero_section(self, changes: Dict[str, Any]) -> Section:
        response = self._send("PUT", "/homepage-sections/hero", json=changes)
        return Section.from_dict(response.json())

    def reorder_sections(self, items: Iterable[Dict[str, Any]]) -> None:
        """Set new orders for several sections in one all-or-nothing call."""
        payload = [{"id": item["id"], "order": item["order"]} for item in items]
        self._send("POST", "/homepage-sections/reorder", json={"sections": payload})

    def delete_section(self, section_id: str) -> None:
        self._send("DELETE", f"/homepage-sections/{section_id}")

    def upload_section_image(
        self,
        section_id: str,
        file: Union[BinaryIO, bytes],
        *,
        filename: Optional[str] = None,
        slot: str = "hero",
    ) -> Section:
        if slot not in IMAGE_SLOTS:
            raise ValueError(f"slot must be one of {IMAGE_SLOTS}")

        if filename is None:
            filename = os.path.basename(getattr(file, "name", "") or "") or "upload.jpg"
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

        response = self._send(
            "POST",
            f"/homepage-sections/{section_id}/upload-{slot}-image",
            files={"file": (filename, file, content_type)},
        )
        return Section.from_dict(response.json())

