"""REST implementation of CatalogRepository on top of httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError as SchemaValidationError

from catalog_console.clients.base import CatalogRepository
from catalog_console.core.config import Settings
from catalog_console.core.exceptions import ConflictError, NotFoundError, TransportError
from catalog_console.schemas.equipment_link import LinkDraft, LinkOrder, LinkUpdate, OrderedLink
from catalog_console.schemas.relationship import RelationshipEdge, edge_adapter, edge_list_adapter

logger = logging.getLogger(__name__)


def _normalize_edge(raw: Any) -> Any:
    # Some catalog versions send PROGRESSION/VARIATION/ALTERNATIVE
    if isinstance(raw, dict) and isinstance(raw.get("relationshipType"), str):
        return {**raw, "relationshipType": raw["relationshipType"].lower()}
    return raw


def _edge_body(edge: RelationshipEdge) -> dict[str, Any]:
    return edge.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)


class HttpCatalogRepository(CatalogRepository):
    """Talks to the catalog API. Responses are wrapped as ``{"data": ...}``."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpCatalogRepository":
        client = httpx.AsyncClient(
            base_url=settings.catalog_api_base_url.rstrip("/"),
            headers=settings.catalog_api_headers,
            timeout=settings.catalog_api_timeout_seconds,
        )
        return cls(client)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        resource_id: str | None = None,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send one request; return the unwrapped ``data`` payload (or None)."""
        logger.debug("%s: %s %s", operation, method, path)
        try:
            resp = await self.client.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            logger.warning("%s: request failed: %s", operation, e)
            raise TransportError(operation, str(e) or type(e).__name__) from e

        if resp.status_code == 404:
            raise NotFoundError(f"{operation}: resource not found", resource_id=resource_id)
        if resp.status_code == 409:
            raise ConflictError(f"{operation}: {self._error_message(resp)}")
        if resp.status_code >= 400:
            message = self._error_message(resp)
            logger.warning("%s: HTTP %s: %s", operation, resp.status_code, message)
            raise TransportError(operation, message, upstream_status=resp.status_code)

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            body = resp.json()
        except ValueError as e:
            raise TransportError(operation, "response body is not JSON", resp.status_code) from e
        return body.get("data") if isinstance(body, dict) else body

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            data = resp.json()
        except ValueError:
            return resp.text or f"HTTP {resp.status_code}"
        if isinstance(data, dict):
            err = data.get("error")
            if isinstance(err, dict) and err.get("message"):
                return str(err["message"])
            for key in ("message", "detail"):
                if data.get(key):
                    return str(data[key])
        return f"HTTP {resp.status_code}"

    @staticmethod
    def _parse(operation: str, adapter_or_model: Any, data: Any) -> Any:
        try:
            if hasattr(adapter_or_model, "validate_python"):
                return adapter_or_model.validate_python(data)
            return adapter_or_model.model_validate(data)
        except SchemaValidationError as e:
            raise TransportError(operation, f"unexpected response shape: {e.error_count()} error(s)") from e

    # ---- relationship edges ----

    async def list_edges(self, exercise_id: str) -> list[RelationshipEdge]:
        data = await self._request(
            "list_edges",
            "GET",
            "/exercises/relationships",
            params={"baseExerciseId": exercise_id},
            resource_id=exercise_id,
        )
        return self._parse("list_edges", edge_list_adapter, [_normalize_edge(e) for e in data or []])

    async def create_edge(self, edge: RelationshipEdge) -> RelationshipEdge:
        data = await self._request("create_edge", "POST", "/exercises/relationships", json=_edge_body(edge))
        return self._parse("create_edge", edge_adapter, _normalize_edge(data))

    async def update_edge(self, edge_id: str, edge: RelationshipEdge) -> RelationshipEdge:
        data = await self._request(
            "update_edge",
            "PUT",
            f"/exercises/relationships/{edge_id}",
            json=_edge_body(edge),
            resource_id=edge_id,
        )
        return self._parse("update_edge", edge_adapter, _normalize_edge(data))

    async def delete_edge(self, edge_id: str) -> None:
        await self._request("delete_edge", "DELETE", f"/exercises/relationships/{edge_id}", resource_id=edge_id)

    # ---- ordered equipment links ----

    async def list_links(self, parent_id: str) -> list[OrderedLink]:
        data = await self._request(
            "list_links", "GET", f"/exercises/{parent_id}/equipment", resource_id=parent_id
        )
        # Catalog splits links into required/optional; merge them back
        if isinstance(data, dict):
            raw = [*(data.get("required") or []), *(data.get("optional") or [])]
        else:
            raw = data or []
        return [self._parse("list_links", OrderedLink, item) for item in raw]

    async def create_link(self, link: LinkDraft) -> OrderedLink:
        data = await self._request(
            "create_link", "POST", "/exercises/equipment", json=link.model_dump(by_alias=True)
        )
        return self._parse("create_link", OrderedLink, data)

    async def update_link(self, link_id: str, fields: LinkUpdate) -> OrderedLink:
        data = await self._request(
            "update_link",
            "PUT",
            f"/exercises/equipment/{link_id}",
            json=fields.model_dump(by_alias=True, exclude_unset=True),
            resource_id=link_id,
        )
        return self._parse("update_link", OrderedLink, data)

    async def delete_link(self, link_id: str) -> None:
        await self._request("delete_link", "DELETE", f"/exercises/equipment/{link_id}", resource_id=link_id)

    async def commit_order(self, parent_id: str, orders: list[LinkOrder]) -> None:
        await self._request(
            "commit_order",
            "PUT",
            f"/exercises/{parent_id}/equipment/order",
            json=[o.model_dump(by_alias=True) for o in orders],
            resource_id=parent_id,
        )

    async def ping(self) -> None:
        await self._request("ping", "GET", "/health")
