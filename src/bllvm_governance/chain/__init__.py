"""Chain — block models, header hashing and the node query interface."""

from __future__ import annotations

from bllvm_governance.chain.header import HEADER_SIZE, block_header_hash, serialize_header
from bllvm_governance.chain.models import Block, BlockHeader
from bllvm_governance.chain.node_api import MemoryNodeAPI, NodeAPI

__all__ = [
    "HEADER_SIZE",
    "Block",
    "BlockHeader",
    "MemoryNodeAPI",
    "NodeAPI",
    "block_header_hash",
    "serialize_header",
]
