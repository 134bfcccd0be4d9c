"""Node query API — the subset of host queries this module relies on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bllvm_governance.chain.models import Block


class NodeAPI(ABC):
    """Abstract query interface onto the host node."""

    @abstractmethod
    async def get_block(self, block_hash: bytes) -> Block | None:
        """Return the block with *block_hash*, or ``None`` if the node lacks it."""


class MemoryNodeAPI(NodeAPI):
    """In-memory node API backed by a dict of blocks (embedding and tests)."""

    def __init__(self, blocks: dict[bytes, Block] | None = None) -> None:
        self._blocks: dict[bytes, Block] = dict(blocks or {})

    def add_block(self, block_hash: bytes, block: Block) -> None:
        """Register *block* under *block_hash*."""
        self._blocks[block_hash] = block

    async def get_block(self, block_hash: bytes) -> Block | None:
        """Look up a block by hash."""
        return self._blocks.get(block_hash)
