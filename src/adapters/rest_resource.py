"""REST adapter for `EntityResource`.

Mapping:
- list_all  -> GET    {collection}
- create    -> POST   {collection}          (body: entity, response: server entity)
- persist   -> PUT    {collection}/{id}     (body: entity)
- remove    -> DELETE {collection}/{id}

Transport errors and non-2xx statuses are raised as `ResourceError`.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import ResourceError
from core.domain.models import Entity, EntityId


class HttpEntityResource:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        collection: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._collection = (collection or self._settings.collection).strip("/")
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings)

    async def __aenter__(self) -> "HttpEntityResource":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _item_path(self, entity_id: EntityId) -> str:
        return f"{self._collection}/{quote(str(entity_id), safe='')}"

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise ResourceError(str(exc) or exc.__class__.__name__) from exc
        if response.status_code < 200 or response.status_code >= 300:
            raise ResourceError(
                f"{method} {path} failed",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ResourceError("Invalid JSON in response") from exc

    async def list_all(self) -> list[Entity]:
        response = await self._request("GET", self._collection)
        payload = self._json(response)
        # Some APIs wrap collections: {"data": [...]}
        if isinstance(payload, dict):
            if "data" in payload:
                payload = payload["data"]
            elif self._collection in payload:
                payload = payload[self._collection]
            else:
                raise ResourceError("Expected a JSON list of records")
        if not isinstance(payload, list):
            raise ResourceError("Expected a JSON list of records")
        return [Entity.model_validate(item) for item in payload]

    async def create(self, entity: Entity) -> Entity:
        response = await self._request("POST", self._collection, json=entity.model_dump(mode="json"))
        payload = self._json(response)
        if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
            payload = payload["data"]
        return Entity.model_validate(payload)

    async def persist(self, entity: Entity) -> None:
        await self._request("PUT", self._item_path(entity.id), json=entity.model_dump(mode="json"))

    async def remove(self, entity_id: EntityId) -> None:
        await self._request("DELETE", self._item_path(entity_id))
