"""Block data models — BlockHeader, Block.

Data classes representing the block records returned by the node's
query API. Hashes are held as raw 32-byte values in internal byte order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

HASH_SIZE = 32


@dataclass(frozen=True)
class BlockHeader:
    """A block header.

    Attributes:
        version: Block version (serialized as an unsigned 32-bit value).
        prev_block_hash: 32-byte hash of the previous block.
        merkle_root: 32-byte Merkle root of the block's transactions.
        timestamp: Block timestamp (unix seconds).
        bits: Compact difficulty target.
        nonce: Proof-of-work nonce.
    """

    version: int
    prev_block_hash: bytes
    merkle_root: bytes
    timestamp: int
    bits: int
    nonce: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict (hashes as hex)."""
        return {
            "version": self.version,
            "prev_block_hash": self.prev_block_hash.hex(),
            "merkle_root": self.merkle_root.hex(),
            "timestamp": self.timestamp,
            "bits": self.bits,
            "nonce": self.nonce,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BlockHeader:
        """Create from a node JSON record."""
        return cls(
            version=data.get("version", 0),
            prev_block_hash=bytes.fromhex(data.get("prev_block_hash", "00" * HASH_SIZE)),
            merkle_root=bytes.fromhex(data.get("merkle_root", "00" * HASH_SIZE)),
            timestamp=data.get("timestamp", 0),
            bits=data.get("bits", 0),
            nonce=data.get("nonce", 0),
        )


@dataclass(frozen=True)
class Block:
    """A full block: header plus its transactions.

    Transactions are kept as the node delivers them (JSON objects); this
    module never interprets them, it only forwards them.
    """

    header: BlockHeader
    transactions: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the full block record."""
        return {
            "header": self.header.to_dict(),
            "transactions": [dict(tx) for tx in self.transactions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Block:
        """Create from a node JSON record."""
        return cls(
            header=BlockHeader.from_dict(data.get("header", {})),
            transactions=list(data.get("transactions", [])),
        )
