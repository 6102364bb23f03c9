"""Compressed world chunks."""

from __future__ import annotations

from dataclasses import dataclass, field

from .binaryio import BinaryIO, ByteOrder
from .compression import CompressionType, decompress_chunk, decompress_zlib_with_length

__all__ = ["Section", "Chunk"]

SECTION_COUNT = 16
BLOCKS_PER_SECTION = 16 * 16 * 16
_V12_SECTIONS_START = 0x4C
_SECTION_UNIT = 0x100


@dataclass
class Section:
    """A 16x16x16 cube of packed block values."""

    blocks: list[int] = field(default_factory=lambda: [0] * BLOCKS_PER_SECTION)

    def __post_init__(self) -> None:
        if len(self.blocks) != BLOCKS_PER_SECTION:
            raise ValueError(
                f"a section holds {BLOCKS_PER_SECTION} blocks, not {len(self.blocks)}"
            )


@dataclass
class Chunk:
    """A chunk's position, timing and section table."""

    version: int = 0
    x: int = 0
    z: int = 0
    last_update: int = 0
    inhabited_time: int = 0
    sections_size: int = 0
    section_jumps: tuple[int, ...] = ()
    section_sizes: tuple[int, ...] = ()

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        outer_compression: CompressionType = CompressionType.ZLIB,
        endian: ByteOrder = ByteOrder.LITTLE,
    ) -> Chunk:
        """Parse a stored chunk.

        The stored layer is zlib, inside which the data is chunk RLE; the
        *outer_compression* of the containing region does not change this.
        """
        reader = BinaryIO(data)
        flags = reader.read_uint32(endian)
        compressed_size = flags & 0x3FFFFFFF
        uncompressed_size = reader.read_uint32(endian)

        compressed = reader.read_bytes(compressed_size)
        inflated = decompress_zlib_with_length(compressed, uncompressed_size, 0)
        chunk_data = decompress_chunk(inflated, uncompressed_size)

        chunk = cls()
        chunk.version = BinaryIO(chunk_data).read_uint16(endian)
        if chunk.version != 12:
            raise ValueError(f"Unsupported chunk version {chunk.version}")
        chunk.read_v12(chunk_data, endian)
        return chunk

    def read_v12(self, data: bytes, endian: ByteOrder) -> None:
        """Read the header and section table of a version 12 chunk."""
        reader = BinaryIO(data)
        self.version = reader.read_uint16(endian)
        self.x = reader.read_int32(endian)
        self.z = reader.read_int32(endian)
        self.last_update = reader.read_uint64(endian)
        self.inhabited_time = reader.read_uint64(endian)
        self.sections_size = reader.read_uint16(endian)
        self.section_jumps = tuple(reader.read_int16(endian) for _ in range(SECTION_COUNT))
        self.section_sizes = tuple(reader.read_signed_byte() for _ in range(SECTION_COUNT))

    @property
    def section_offsets(self) -> dict[int, int]:
        """Offsets into the chunk data of each non-empty section, by index."""
        return {
            index: _V12_SECTIONS_START + jump
            for index, (jump, size) in enumerate(zip(self.section_jumps, self.section_sizes))
            if size * _SECTION_UNIT != 0
        }