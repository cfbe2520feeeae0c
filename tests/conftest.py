"""Shared fixtures: an in-memory document server and recording gateways."""
import json

import httpx
import pytest

from database import GatewayError


class FakeDocumentServer:
    """Firebase-style single JSON document behind GET/PUT."""

    def __init__(self, document=None, status=200):
        self.document = document
        self.status = status
        self.puts = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            if self.status != 200:
                return httpx.Response(self.status, text="boom")
            return httpx.Response(200, text=json.dumps(self.document))
        if request.method == "PUT":
            body = json.loads(request.content)
            self.puts.append(body)
            self.document = body
            return httpx.Response(200, json=body)
        return httpx.Response(405)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class RecordingGateway:
    def __init__(self, document=None, fail_load=False, fail_save=False):
        self.document = document
        self.fail_load = fail_load
        self.fail_save = fail_save
        self.saved = []

    async def load(self):
        if self.fail_load:
            raise GatewayError("load failed")
        return self.document

    async def save(self, aggregate):
        self.saved.append(aggregate)
        if self.fail_save:
            raise GatewayError("save failed")


class Clock:
    def __init__(self, start=1_700_000_000_000):
        self.now = start

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return Clock()
