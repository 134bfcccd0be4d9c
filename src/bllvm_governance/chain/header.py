"""Block header hashing — fixed byte layout + double SHA-256.

The layout must match the node's own header hash exactly:

    version         4 bytes  little-endian (unsigned)
    prev_block_hash 32 bytes raw
    merkle_root     32 bytes raw
    timestamp       8 bytes  little-endian
    bits            8 bytes  little-endian
    nonce           8 bytes  little-endian

No length prefixes, no padding. Total: 92 bytes.
"""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING

from bllvm_governance.chain.models import HASH_SIZE
from bllvm_governance.utils.crypto import sha256d

if TYPE_CHECKING:
    from bllvm_governance.chain.models import BlockHeader

# "<" disables alignment padding
_HEADER_FORMAT = struct.Struct("<I32s32sQQQ")

HEADER_SIZE = _HEADER_FORMAT.size


def serialize_header(header: BlockHeader) -> bytes:
    """Serialize a header into its fixed 92-byte hashing layout.

    Raises:
        ValueError: If a hash is not exactly 32 bytes or an integer field
            does not fit its width.
    """
    for name, value in (
        ("prev_block_hash", header.prev_block_hash),
        ("merkle_root", header.merkle_root),
    ):
        if len(value) != HASH_SIZE:
            msg = f"{name} must be {HASH_SIZE} bytes, got {len(value)}"
            raise ValueError(msg)
    try:
        return _HEADER_FORMAT.pack(
            # The node casts its version to u32 before hashing
            header.version & 0xFFFFFFFF,
            header.prev_block_hash,
            header.merkle_root,
            header.timestamp,
            header.bits,
            header.nonce,
        )
    except struct.error as exc:
        msg = f"Header field out of range: {exc}"
        raise ValueError(msg) from exc


def block_header_hash(header: BlockHeader) -> bytes:
    """Return the 32-byte double SHA-256 hash of *header*."""
    return sha256d(serialize_header(header))
