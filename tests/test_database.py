"""Tests for database.py — remote document and local storage gateways."""
import asyncio
import json

import httpx
import pytest

from conftest import FakeDocumentServer
from database import GatewayError, LocalStorageGateway, RemoteDocumentGateway
from defaults import default_aggregate
from schemas import Skill, StoredDocument
from storage import KeyValueStorage

URL = "https://example-rtdb.test/data.json"


def run_remote(server, action):
    async def go():
        async with httpx.AsyncClient(transport=server.transport()) as client:
            return await action(RemoteDocumentGateway(URL, client))

    return asyncio.run(go())


def test_remote_round_trip():
    server = FakeDocumentServer(document=None)
    aggregate = default_aggregate()

    async def action(gateway):
        await gateway.save(aggregate)
        return await gateway.load()

    loaded = run_remote(server, action)
    assert StoredDocument.model_validate(aggregate.to_wire()) == loaded
    assert server.puts[0]["personalInfo"]["fullName"] == aggregate.profile.full_name
    assert "shortDescription" in server.puts[0]["projects"][0]


def test_remote_null_document_is_empty():
    server = FakeDocumentServer(document=None)
    assert run_remote(server, lambda gw: gw.load()) is None


def test_remote_not_found_is_empty():
    server = FakeDocumentServer(status=404)
    assert run_remote(server, lambda gw: gw.load()) is None


def test_remote_empty_body_is_empty():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text=""))

    async def go():
        async with httpx.AsyncClient(transport=transport) as client:
            return await RemoteDocumentGateway(URL, client).load()

    assert asyncio.run(go()) is None


def test_remote_server_error_raises():
    server = FakeDocumentServer(status=500)
    with pytest.raises(GatewayError):
        run_remote(server, lambda gw: gw.load())


def test_remote_connection_error_raises():
    def refuse(request):
        raise httpx.ConnectError("refused", request=request)

    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as client:
            gateway = RemoteDocumentGateway(URL, client)
            with pytest.raises(GatewayError):
                await gateway.load()
            with pytest.raises(GatewayError):
                await gateway.save(default_aggregate())

    asyncio.run(go())


def test_remote_partial_document_leaves_missing_fields_empty():
    server = FakeDocumentServer(document={"skills": [{"name": "Go", "category": "Language"}]})
    loaded = run_remote(server, lambda gw: gw.load())
    assert loaded.skills == [Skill(name="Go", category="Language")]
    assert loaded.profile is None
    assert loaded.posts is None


def test_remote_malformed_field_is_dropped():
    server = FakeDocumentServer(
        document={
            "skills": [{"name": "Go", "category": "Language"}],
            "projects": [{"title": "no id"}],
        }
    )
    loaded = run_remote(server, lambda gw: gw.load())
    assert loaded.projects is None
    assert len(loaded.skills) == 1


def test_remote_save_rejected_raises():
    transport = httpx.MockTransport(lambda request: httpx.Response(401, json={"error": "Permission denied"}))

    async def go():
        async with httpx.AsyncClient(transport=transport) as client:
            await RemoteDocumentGateway(URL, client).save(default_aggregate())

    with pytest.raises(GatewayError):
        asyncio.run(go())


def test_local_gateway_empty_storage():
    gateway = LocalStorageGateway(KeyValueStorage())
    assert asyncio.run(gateway.load()) is None


def test_local_gateway_round_trip():
    storage = KeyValueStorage()
    gateway = LocalStorageGateway(storage)
    aggregate = default_aggregate()

    async def go():
        await gateway.save(aggregate)
        return await gateway.load()

    loaded = asyncio.run(go())
    assert sorted(storage.keys()) == ["posts", "profile", "projects", "skills", "timeline"]
    assert loaded.profile == aggregate.profile
    assert loaded.timeline == aggregate.timeline
    assert loaded.posts == aggregate.posts


def test_local_gateway_parses_each_key_independently():
    storage = KeyValueStorage()
    storage.set("skills", json.dumps([{"name": "Go", "category": "Language"}]))
    storage.set("posts", "{not json")
    storage.set("projects", json.dumps([{"bogus": True}]))

    loaded = asyncio.run(LocalStorageGateway(storage).load())
    assert loaded.skills == [Skill(name="Go", category="Language")]
    assert loaded.posts is None
    assert loaded.projects is None
    assert loaded.profile is None


def test_local_gateway_failed_save_keeps_previous_document(tmp_path, monkeypatch):
    storage = KeyValueStorage(tmp_path / "local.json")
    gateway = LocalStorageGateway(storage)
    asyncio.run(gateway.save(default_aggregate()))
    before = {name: storage.get(name) for name in storage.keys()}

    def disk_full(items):
        raise OSError("No space left on device")

    monkeypatch.setattr(storage, "_write", disk_full)
    changed = default_aggregate().model_copy(update={"skills": [], "posts": []})
    with pytest.raises(GatewayError):
        asyncio.run(gateway.save(changed))

    assert {name: storage.get(name) for name in storage.keys()} == before
    reopened = asyncio.run(LocalStorageGateway(KeyValueStorage(tmp_path / "local.json")).load())
    assert reopened.skills == default_aggregate().skills
    assert reopened.posts == default_aggregate().posts
