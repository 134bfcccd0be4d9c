"""Shared test fixtures for the bllvm-governance test suite."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest

from bllvm_governance.chain.models import Block, BlockHeader
from bllvm_governance.chain.node_api import NodeAPI

WEBHOOK_URL = "https://governance.example.com/webhook"

_NODE_ENV_VARS = ("MODULE_NAME", "BLLVM_MODULE_SOCKET", "MODULE_SOCKET_DIR")


class RecordingTransport(httpx.MockTransport):
    """Mock transport that records every request body it receives."""

    def __init__(self, status_code: int = 200) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"ok": True})

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


class BlockingTransport(httpx.MockTransport):
    """Mock transport whose responses wait until ``release`` is set."""

    def __init__(self) -> None:
        self.release = asyncio.Event()
        self.started = 0
        super().__init__(self._handle)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.started += 1
        await self.release.wait()
        return httpx.Response(200)


class StubNodeAPI(NodeAPI):
    """Node API returning a fixed block (or none) and counting calls."""

    def __init__(self, block: Block | None = None, *, error: Exception | None = None) -> None:
        self.block = block
        self.error = error
        self.calls: list[bytes] = []

    async def get_block(self, block_hash: bytes) -> Block | None:
        self.calls.append(block_hash)
        if self.error is not None:
            raise self.error
        return self.block


def _make_header(**overrides: Any) -> BlockHeader:
    fields: dict[str, Any] = {
        "version": 1,
        "prev_block_hash": bytes(range(32)),
        "merkle_root": bytes(range(32, 64)),
        "timestamp": 1_700_000_000,
        "bits": 0x1D00FFFF,
        "nonce": 2_083_236_893,
    }
    fields.update(overrides)
    return BlockHeader(**fields)


@pytest.fixture(autouse=True)
def _clean_node_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep node-provided env vars from leaking into settings tests."""
    for var in _NODE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_header():
    """Factory for headers with realistic defaults and per-field overrides."""
    return _make_header


@pytest.fixture
def header() -> BlockHeader:
    return _make_header()


@pytest.fixture
def block(header: BlockHeader) -> Block:
    return Block(header=header, transactions=[{"txid": "aa" * 32, "size": 250}])


@pytest.fixture
def stub_node_api():
    """The StubNodeAPI class, for building node APIs with fixed answers."""
    return StubNodeAPI


@pytest.fixture
def blocking_transport() -> BlockingTransport:
    return BlockingTransport()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
async def http_client(transport: RecordingTransport):
    client = httpx.AsyncClient(transport=transport)
    yield client
    await client.aclose()
