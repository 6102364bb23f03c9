"""Region files (1024 chunks each) and split-save regions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .binaryio import BinaryIO, ByteOrder
from .chunk import Chunk
from .compression import CompressionType

__all__ = ["ChunkLocation", "RegionChunk", "Region", "SplitSave"]

CHUNKS_PER_REGION = 1024
SECTOR_SIZE = 4096
NO_DIMENSION = -9999

_REGION_RE = re.compile(r"(DIM([-0-9]{1,2}))?(r)\.([-0-9]{1,2})\.([-0-9]{1,2}).mcr")
_SPLIT_SAVE_RE = re.compile(
    r"(GAMEDATA)_([0-9]{4})([0-9a-fA-F]{2})([0-9a-fA-F]{2})", re.ASCII
)
_LEADING_INT = {10: re.compile(r"\s*[+-]?[0-9]+"), 16: re.compile(r"\s*[+-]?[0-9a-fA-F]+")}


def _int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _parse_int(text: str, base: int = 10) -> int:
    """Parse the leading integer of *text*, as a signed 16-bit value."""
    match = _LEADING_INT[base].match(text)
    if match is None:
        raise ValueError(f"no integer at the start of {text!r}")
    return _int16(int(match.group().strip(), base))


@dataclass
class ChunkLocation:
    """Where a chunk is stored in the region data, in bytes."""

    offset: int = 0
    size: int = 0


@dataclass
class RegionChunk:
    """One slot of a region: location, timestamp and the chunk if present."""

    location: ChunkLocation = field(default_factory=ChunkLocation)
    timestamp: int = 0
    chunk: Chunk | None = None


def _empty_chunks() -> list[RegionChunk]:
    return [RegionChunk() for _ in range(CHUNKS_PER_REGION)]


@dataclass
class Region:
    """A region's coordinates, dimension and chunk slots."""

    x: int = 0
    z: int = 0
    dim: int = 0
    chunks: list[RegionChunk] = field(default_factory=_empty_chunks)

    @staticmethod
    def get_xz_from_filename(name: str) -> tuple[int, int] | None:
        """Return (x, z) from a name such as "DIM-1r.0.-1.mcr", or None."""
        match = _REGION_RE.fullmatch(name)
        if match is None:
            return None
        return _parse_int(match.group(4)), _parse_int(match.group(5))

    @staticmethod
    def get_dim_from_filename(name: str) -> int:
        """Return the dimension of a region filename, or -9999 if it is not one.

        Raises ValueError when the name has no "DIM" prefix.
        """
        match = _REGION_RE.fullmatch(name)
        if match is None:
            return NO_DIMENSION
        return _parse_int(match.group(2) or "")

    @classmethod
    def _coords_from_filename(cls, filename: str) -> tuple[int, int, int] | None:
        xz = cls.get_xz_from_filename(filename)
        if xz is None:
            return None
        try:
            dim = cls.get_dim_from_filename(filename)
        except ValueError:
            dim = 0
        return xz[0], xz[1], dim

    @classmethod
    def from_filename(cls, filename: str) -> Region:
        """An empty region placed by its filename."""
        coords = cls._coords_from_filename(filename)
        if coords is None:
            raise ValueError(f"{filename!r} is not a region filename")
        x, z, dim = coords
        return cls(x, z, dim)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        filename: str,
        outer_compression: CompressionType = CompressionType.ZLIB,
        endian: ByteOrder = ByteOrder.LITTLE,
    ) -> Region:
        """Parse a region; coordinates come from *filename* (0 if it does not match)."""
        x, z, dim = cls._coords_from_filename(filename) or (0, 0, 0)
        reader = BinaryIO(data)

        locations = []
        for _ in range(CHUNKS_PER_REGION):
            if endian is ByteOrder.LITTLE:
                size = reader.read_byte() * SECTOR_SIZE
                offset = reader.read_int24(endian) * SECTOR_SIZE
            else:
                offset = reader.read_int24(endian) * SECTOR_SIZE
                size = reader.read_byte() * SECTOR_SIZE
            locations.append(ChunkLocation(offset, size))

        timestamps = [reader.read_uint32(endian) for _ in range(CHUNKS_PER_REGION)]

        chunks = []
        for location, timestamp in zip(locations, timestamps):
            chunk = None
            if location.size != 0:
                reader.seek(location.offset)
                chunk = Chunk.from_bytes(
                    reader.read_bytes(location.size), outer_compression, endian
                )
            chunks.append(RegionChunk(location, timestamp, chunk))
        return cls(x, z, dim, chunks)


class SplitSave(Region):
    """A split-save region, named like "GAMEDATA_0001xxzz"."""

    @staticmethod
    def get_xz_from_filename(name: str) -> tuple[int, int] | None:
        """Return the hexadecimal (x, z) of a split-save name, or None."""
        match = _SPLIT_SAVE_RE.fullmatch(name)
        if match is None:
            return None
        return _parse_int(match.group(3), 16), _parse_int(match.group(4), 16)

    @staticmethod
    def get_dim_from_filename(name: str) -> int:
        """Return the dimension of a split-save name, or -9999 if it is not one."""
        match = _SPLIT_SAVE_RE.fullmatch(name)
        if match is None:
            return NO_DIMENSION
        return _parse_int(match.group(2), 16)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        filename: str,
        outer_compression: CompressionType = CompressionType.ZLIB,
        endian: ByteOrder = ByteOrder.LITTLE,
    ) -> SplitSave:
        """A split-save region placed by its filename.

        Only the filename is read; the chunk data of split saves is not parsed.
        Coordinates fall back to 0 when the name does not match.
        """
        dim = cls.get_dim_from_filename(filename)
        x, z = cls.get_xz_from_filename(filename) or (0, 0)
        return cls(x, z, dim)