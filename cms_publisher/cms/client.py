"""
HTTP client for a microCMS-style content REST API.

All calls go through one injected httpx.Client so the transport can be
replaced (httpx.MockTransport in tests). Each request is bounded by the
time left on the caller's shared Deadline.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from ..config import CMSConfig, CMSCredentials
from ..core.types import Article, RemoteContentRef
from ..errors import DecodeError, RemoteError, TransportError
from .base import ContentGateway
from .deadline import Deadline


class CMSClient(ContentGateway):
    """Typed client for the list/create/update endpoints of one API.

    Args:
        credentials: Resolved service id, API key and endpoint name
        cfg: Host, header and field settings
        http_client: Shared httpx client; one is created if omitted
    """

    def __init__(
        self,
        credentials: CMSCredentials,
        cfg: CMSConfig | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.credentials = credentials
        self.cfg = cfg or CMSConfig()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(trust_env=self.cfg.trust_env)
        self.base_url = (
            f"https://{credentials.service_id}.{self.cfg.host}"
            f"/api/{self.cfg.api_version}/{credentials.endpoint}"
        )

    def __enter__(self) -> CMSClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def exists(self, external_id: str, deadline: Deadline) -> RemoteContentRef:
        params = {"filters": f"{self.cfg.id_field}[equals]{external_id}"}
        body = self._send("GET", self.base_url, deadline, params=params)
        total_count, contents = _decode_list_response(body)
        if total_count > 0 and contents:
            return RemoteContentRef(exists=True, remote_id=contents[0])
        return RemoteContentRef(exists=False)

    def create(self, article: Article, deadline: Deadline) -> None:
        self._send("POST", self.base_url, deadline, payload=self._build_payload(article))

    def update(self, remote_id: str, article: Article, deadline: Deadline) -> None:
        url = f"{self.base_url}/{remote_id}"
        self._send("PATCH", url, deadline, payload=self._build_payload(article))

    def _build_payload(self, article: Article) -> dict[str, str]:
        return {
            "title": article.title,
            "tags": article.tags_joined,
            self.cfg.id_field: article.external_id,
            "content": article.html_content,
        }

    def _send(
        self,
        method: str,
        url: str,
        deadline: Deadline,
        params: dict[str, str] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> bytes:
        """Send one request and return the body of a 2xx response.

        The deadline bounds the whole call: httpx timeouts only cover single
        phases and socket reads, so the deadline is also checked between
        body chunks.
        """
        remaining = deadline.remaining()
        if remaining <= 0:
            raise TransportError(f"{method} {url}: timeout: deadline exceeded", timeout=True)

        headers = {self.cfg.api_key_header: self.credentials.api_key}
        content: bytes | None = None
        if payload is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(payload, ensure_ascii=False).encode("utf-8")

        try:
            with self._client.stream(
                method,
                url,
                params=params,
                content=content,
                headers=headers,
                timeout=remaining,
            ) as resp:
                body = bytearray()
                for chunk in resp.iter_bytes():
                    body.extend(chunk)
                    if deadline.expired:
                        break
                if deadline.expired:
                    raise TransportError(
                        f"{method} {url}: timeout: deadline exceeded while reading response",
                        timeout=True,
                    )
                status_code = resp.status_code
        except httpx.TimeoutException as exc:
            raise TransportError(f"{method} {url}: timeout: {exc}", timeout=True) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"{method} {url}: {type(exc).__name__}: {exc}") from exc

        if not 200 <= status_code < 300:
            raise RemoteError(status_code, body.decode("utf-8", errors="replace"))
        return bytes(body)


def _decode_list_response(body: bytes) -> tuple[int, list[str]]:
    """Decode `{totalCount, contents: [{id}, ...]}` into (count, ids)."""
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise DecodeError(f"failed to decode response body: {exc}") from exc

    if not isinstance(data, dict):
        raise DecodeError("failed to decode response body: expected a JSON object")

    total_count = data.get("totalCount", 0)
    if isinstance(total_count, bool) or not isinstance(total_count, int):
        raise DecodeError(f"failed to decode response body: invalid totalCount {total_count!r}")

    contents = data.get("contents") or []
    if not isinstance(contents, list):
        raise DecodeError("failed to decode response body: 'contents' must be a list")

    ids: list[str] = []
    for item in contents:
        if not isinstance(item, dict) or not isinstance(item.get("id", ""), str):
            raise DecodeError(f"failed to decode response body: invalid content {item!r}")
        ids.append(item.get("id", ""))
    return total_count, ids
