"""Tests for block header serialization and hashing."""

from __future__ import annotations

import dataclasses
import hashlib

import pytest

from bllvm_governance.chain.header import HEADER_SIZE, block_header_hash, serialize_header
from bllvm_governance.chain.models import BlockHeader

ZERO_HASH = b"\x00" * 32


def _zero_header() -> BlockHeader:
    return BlockHeader(
        version=1,
        prev_block_hash=ZERO_HASH,
        merkle_root=ZERO_HASH,
        timestamp=0,
        bits=0,
        nonce=0,
    )


# ---------------------------------------------------------------------------
# Byte layout
# ---------------------------------------------------------------------------


class TestSerializeHeader:
    def test_length_is_sum_of_field_widths(self) -> None:
        data = serialize_header(_zero_header())
        assert len(data) == 4 + 32 + 32 + 8 + 8 + 8
        assert len(data) == HEADER_SIZE == 92

    def test_version_little_endian(self) -> None:
        data = serialize_header(_zero_header())
        assert data[0] == 0x01
        assert data[1:4] == b"\x00\x00\x00"
        assert data[4:] == b"\x00" * 88

    def test_field_offsets(self, header: BlockHeader) -> None:
        data = serialize_header(header)
        assert data[4:36] == header.prev_block_hash
        assert data[36:68] == header.merkle_root
        assert int.from_bytes(data[68:76], "little") == header.timestamp
        assert int.from_bytes(data[76:84], "little") == header.bits
        assert int.from_bytes(data[84:92], "little") == header.nonce

    def test_hashes_copied_raw(self, make_header) -> None:
        prev = bytes.fromhex("ff" + "00" * 31)
        data = serialize_header(make_header(prev_block_hash=prev))
        # No byte reversal or re-encoding
        assert data[4] == 0xFF

    def test_negative_version_cast_to_u32(self, make_header) -> None:
        data = serialize_header(make_header(version=-1))
        assert data[:4] == b"\xff\xff\xff\xff"

    def test_short_hash_rejected(self, make_header) -> None:
        with pytest.raises(ValueError, match="prev_block_hash must be 32 bytes"):
            serialize_header(make_header(prev_block_hash=b"\x00" * 31))

    def test_long_merkle_root_rejected(self, make_header) -> None:
        with pytest.raises(ValueError, match="merkle_root must be 32 bytes"):
            serialize_header(make_header(merkle_root=b"\x00" * 33))

    def test_out_of_range_integer_rejected(self, make_header) -> None:
        with pytest.raises(ValueError, match="out of range"):
            serialize_header(make_header(nonce=2**64))

    def test_negative_timestamp_rejected(self, make_header) -> None:
        with pytest.raises(ValueError):
            serialize_header(make_header(timestamp=-1))


# ---------------------------------------------------------------------------
# Hash
# ---------------------------------------------------------------------------


class TestBlockHeaderHash:
    def test_is_double_sha256_of_layout(self, header: BlockHeader) -> None:
        raw = serialize_header(header)
        expected = hashlib.sha256(hashlib.sha256(raw).digest()).digest()
        assert block_header_hash(header) == expected

    def test_length(self, header: BlockHeader) -> None:
        assert len(block_header_hash(header)) == 32

    def test_deterministic(self, make_header) -> None:
        assert block_header_hash(make_header()) == block_header_hash(make_header())

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("version", 2),
            ("prev_block_hash", bytes(range(1, 33))),
            ("merkle_root", bytes(range(33, 65))),
            ("timestamp", 1_700_000_001),
            ("bits", 0x1D00FFFE),
            ("nonce", 2_083_236_894),
        ],
    )
    def test_sensitive_to_every_field(self, header: BlockHeader, field: str, value) -> None:
        changed = dataclasses.replace(header, **{field: value})
        assert block_header_hash(changed) != block_header_hash(header)

    def test_sensitive_to_single_byte_of_hash_field(self, header: BlockHeader) -> None:
        flipped = bytearray(header.merkle_root)
        flipped[31] ^= 0x01
        changed = dataclasses.replace(header, merkle_root=bytes(flipped))
        assert block_header_hash(changed) != block_header_hash(header)

    def test_sensitive_to_field_order(self, header: BlockHeader) -> None:
        swapped = dataclasses.replace(
            header,
            prev_block_hash=header.merkle_root,
            merkle_root=header.prev_block_hash,
        )
        assert block_header_hash(swapped) != block_header_hash(header)
