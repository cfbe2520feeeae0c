"""
Persistence gateways for the content aggregate.

The remote gateway treats a single JSON document (Firebase-style REST URL)
as the store: GET reads it whole, PUT replaces it whole. The local gateway
keeps one storage key per aggregate field.
"""

import json
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from schemas import Aggregate, StoredDocument
from storage import KeyValueStorage

logger = logging.getLogger(__name__)

FIELDS = ("profile", "skills", "projects", "timeline", "posts")


class GatewayError(Exception):
    """A load or save against the store did not succeed."""


def parse_field(name: str, value) -> Optional[object]:
    """Validate one aggregate field; None when it is malformed."""
    try:
        return getattr(StoredDocument.model_validate({name: value}), name)
    except ValidationError as e:
        logger.warning("Ignoring malformed '%s' in stored document: %s", name, e.error_count())
        return None


def parse_document(data: dict) -> StoredDocument:
    fields = {}
    for name in FIELDS:
        wire = StoredDocument.model_fields[name].alias or name
        if wire in data:
            raw = data[wire]
        elif name in data:
            raw = data[name]
        else:
            continue
        if raw is not None:
            fields[name] = parse_field(name, raw)
    return StoredDocument(**fields)


class RemoteDocumentGateway:
    def __init__(self, url: str, client: httpx.AsyncClient):
        self.url = url
        self.client = client

    async def load(self) -> Optional[StoredDocument]:
        try:
            response = await self.client.get(self.url)
        except httpx.HTTPError as e:
            raise GatewayError(f"GET {self.url} failed: {e}") from e

        if response.status_code == 404:
            return None
        if not response.is_success:
            raise GatewayError(f"GET {self.url} failed with status {response.status_code}")
        if not response.text.strip():
            return None
        try:
            data = response.json()
        except ValueError as e:
            raise GatewayError(f"GET {self.url} returned invalid JSON: {e}") from e
        if data is None:
            return None
        if not isinstance(data, dict):
            raise GatewayError(f"GET {self.url} returned {type(data).__name__}, expected an object")
        return parse_document(data)

    async def save(self, aggregate: Aggregate) -> None:
        try:
            response = await self.client.put(self.url, json=aggregate.to_wire())
        except httpx.HTTPError as e:
            raise GatewayError(f"PUT {self.url} failed: {e}") from e
        if not response.is_success:
            raise GatewayError(f"PUT {self.url} failed with status {response.status_code}")
        logger.debug("Saved aggregate to %s", self.url)


class LocalStorageGateway:
    """Same contract, one JSON-encoded storage key per field."""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    async def load(self) -> Optional[StoredDocument]:
        if not any(name in self.storage for name in FIELDS):
            return None
        fields = {}
        for name in FIELDS:
            raw = self.storage.get(name)
            if raw is None:
                continue
            try:
                value = json.loads(raw)
            except ValueError:
                logger.warning("Ignoring unparseable '%s' in local storage", name)
                continue
            if value is not None:
                fields[name] = parse_field(name, value)
        return StoredDocument(**fields)

    async def save(self, aggregate: Aggregate) -> None:
        wire = aggregate.to_wire()
        values = {name: json.dumps(wire[Aggregate.model_fields[name].alias or name]) for name in FIELDS}
        try:
            self.storage.update(values)
        except OSError as e:
            raise GatewayError(f"Could not write local storage: {e}") from e
