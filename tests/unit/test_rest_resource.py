"""
Unit tests for the REST adapter, using httpx.MockTransport.
"""

import asyncio
import json

import httpx
import pytest

from adapters.http_client import build_async_client
from adapters.rest_resource import HttpEntityResource
from core.config import AppSettings
from core.domain.errors import ResourceError
from core.domain.actions import AddSucceeded, LoadAllFailed
from core.domain.models import Entity
from core.effects import EntityEffects
from core.services.store import EntityStore


@pytest.fixture
def settings(isolated_settings) -> AppSettings:
    return AppSettings(api_base_url="http://test.local/api", collection="pokemon")


def resource_for(settings, handler) -> HttpEntityResource:
    client = build_async_client(settings, transport=httpx.MockTransport(handler))
    return HttpEntityResource(settings, client=client)


def test_list_all(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/api/pokemon"
        return httpx.Response(200, json=[{"id": 1, "name": "Bulbasaur"}])

    entities = asyncio.run(resource_for(settings, handler).list_all())
    assert entities == [Entity.model_validate({"id": 1, "name": "Bulbasaur"})]


def test_list_all_unwraps_data_envelope(settings):
    def handler(request):
        return httpx.Response(200, json={"data": [{"id": "a"}]})

    entities = asyncio.run(resource_for(settings, handler).list_all())
    assert [e.id for e in entities] == ["a"]


def test_create_returns_server_entity(settings):
    def handler(request):
        assert request.method == "POST"
        body = json.loads(request.content)
        return httpx.Response(201, json={**body, "createdAt": "now"})

    created = asyncio.run(resource_for(settings, handler).create(Entity.model_validate({"id": 2, "name": "Ivysaur"})))
    assert created.createdAt == "now"


def test_persist_and_remove_use_item_path(settings):
    seen = []

    def handler(request):
        seen.append((request.method, request.url.path))
        return httpx.Response(204)

    async def scenario():
        resource = resource_for(settings, handler)
        await resource.persist(Entity.model_validate({"id": 3, "name": "Venusaur"}))
        await resource.remove(3)

    asyncio.run(scenario())
    assert seen == [("PUT", "/api/pokemon/3"), ("DELETE", "/api/pokemon/3")]


def test_error_status_raises_resource_error(settings):
    def handler(request):
        return httpx.Response(500, json={"error": "boom"})

    with pytest.raises(ResourceError) as info:
        asyncio.run(resource_for(settings, handler).remove(1))
    assert info.value.status_code == 500


def test_transport_error_raises_resource_error(settings):
    def handler(request):
        raise httpx.ConnectError("network", request=request)

    with pytest.raises(ResourceError, match="network"):
        asyncio.run(resource_for(settings, handler).list_all())


def test_invalid_json_raises_resource_error(settings):
    def handler(request):
        return httpx.Response(200, content=b"<html>")

    with pytest.raises(ResourceError, match="Invalid JSON"):
        asyncio.run(resource_for(settings, handler).list_all())


def test_owned_client_is_closed(settings):
    async def scenario():
        async with HttpEntityResource(settings) as resource:
            client = resource._client
        return client

    assert asyncio.run(scenario()).is_closed


def test_unrecognized_object_payload_is_an_error(settings):
    def handler(request):
        return httpx.Response(200, json={"error": "maintenance"})

    with pytest.raises(ResourceError, match="Expected a JSON list"):
        asyncio.run(resource_for(settings, handler).list_all())


def test_collection_key_payload_is_unwrapped(settings):
    def handler(request):
        return httpx.Response(200, json={"pokemon": [{"id": 1}]})

    entities = asyncio.run(resource_for(settings, handler).list_all())
    assert [e.id for e in entities] == [1]


def test_unrecognized_payload_leaves_store_untouched(settings):
    def handler(request):
        return httpx.Response(200, json={"error": "maintenance"})

    async def scenario():
        store = EntityStore(EntityEffects(resource_for(settings, handler)))
        store.dispatch(AddSucceeded(entity={"id": 1}))
        return store, await store.load_all()

    store, outcome = asyncio.run(scenario())
    assert isinstance(outcome, LoadAllFailed)
    assert store.state.ids == (1,)


def test_string_ids_are_quoted_in_item_path(settings):
    seen = []

    def handler(request):
        seen.append(request.url.raw_path)
        return httpx.Response(204)

    asyncio.run(resource_for(settings, handler).remove("a/b?c"))
    assert seen == [b"/api/pokemon/a%2Fb%3Fc"]
