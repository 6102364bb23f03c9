"""Colour tables: named ARGB colours and per-world water and fog colours."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from .binaryio import BinaryIO, ByteOrder

__all__ = [
    "ARGB",
    "Color",
    "WorldColor",
    "ColorFileCommons",
    "ColorFile",
    "ColorFileOld",
]

_BE = ByteOrder.BIG
_MAX_NAME_LENGTH = 0xFFFF


def _encode_name(name: str) -> bytes:
    encoded = name.encode("utf-8", "surrogateescape")
    if len(encoded) > _MAX_NAME_LENGTH:
        raise ValueError(f"colour name is too long ({len(encoded)} bytes)")
    return encoded


def _write_name(writer: BinaryIO, name: str) -> None:
    encoded = _encode_name(name)
    writer.write_uint16(len(encoded), _BE)
    writer.write_bytes(encoded)


def _read_name(reader: BinaryIO) -> str:
    return reader.read_utf8(reader.read_uint16(_BE))


@dataclass(frozen=True)
class ARGB:
    """A colour stored as alpha, red, green and blue bytes, in that order."""

    a: int = 0
    r: int = 0
    g: int = 0
    b: int = 0

    SIZE: ClassVar[int] = 4

    @classmethod
    def read(cls, reader: BinaryIO) -> ARGB:
        return cls(*reader.read_bytes(cls.SIZE))

    def to_bytes(self) -> bytes:
        return bytes((self.a, self.r, self.g, self.b))


@dataclass
class Color:
    """A named colour."""

    name: str
    color: ARGB = field(default_factory=ARGB)

    @classmethod
    def read(cls, reader: BinaryIO) -> Color:
        """Read one colour entry at the reader's cursor."""
        name = _read_name(reader)
        return cls(name, ARGB.read(reader))

    @classmethod
    def from_bytes(cls, data: bytes) -> Color:
        return cls.read(BinaryIO(data))

    @property
    def size(self) -> int:
        return 2 + len(_encode_name(self.name)) + ARGB.SIZE

    def to_bytes(self) -> bytes:
        writer = BinaryIO()
        _write_name(writer, self.name)
        writer.write_bytes(self.color.to_bytes())
        return writer.getvalue()


@dataclass
class WorldColor:
    """The water, underwater and fog colours of a named world type."""

    name: str
    water_color: ARGB = field(default_factory=ARGB)
    underwater_color: ARGB = field(default_factory=ARGB)
    fog_color: ARGB = field(default_factory=ARGB)

    @classmethod
    def read(cls, reader: BinaryIO) -> WorldColor:
        """Read one world-colour entry at the reader's cursor."""
        name = _read_name(reader)
        water = ARGB.read(reader)
        underwater = ARGB.read(reader)
        fog = ARGB.read(reader)
        return cls(name, water, underwater, fog)

    @classmethod
    def from_bytes(cls, data: bytes) -> WorldColor:
        return cls.read(BinaryIO(data))

    @property
    def size(self) -> int:
        return 2 + len(_encode_name(self.name)) + 3 * ARGB.SIZE

    def to_bytes(self) -> bytes:
        writer = BinaryIO()
        _write_name(writer, self.name)
        for argb in (self.water_color, self.underwater_color, self.fog_color):
            writer.write_bytes(argb.to_bytes())
        return writer.getvalue()


@dataclass
class ColorFileCommons(ABC):
    """A versioned list of named colours."""

    colors: list[Color] = field(default_factory=list)
    version: int = 0

    def get_color_by_name(self, name: str) -> Color | None:
        """Return the first colour called *name*, or None."""
        return next((color for color in self.colors if color.name == name), None)

    def add_color(self, color: Color) -> None:
        self.colors.append(color)

    @property
    @abstractmethod
    def size(self) -> int:
        """Size in bytes of the serialized file."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Serialize the file."""

    def _write_colors(self, writer: BinaryIO) -> None:
        writer.write_uint32(self.version, _BE)
        writer.write_uint32(len(self.colors), _BE)
        for color in self.colors:
            writer.write_bytes(color.to_bytes())


@dataclass
class ColorFile(ColorFileCommons):
    """A colour table that also holds world colours."""

    version: int = 4
    world_colors: list[WorldColor] = field(default_factory=list)

    @classmethod
    def from_bytes(cls, data: bytes) -> ColorFile:
        reader = BinaryIO(data)
        version = reader.read_uint32(_BE)
        colors = [Color.read(reader) for _ in range(reader.read_uint32(_BE))]
        world_colors = [WorldColor.read(reader) for _ in range(reader.read_uint32(_BE))]
        return cls(colors=colors, version=version, world_colors=world_colors)

    @property
    def size(self) -> int:
        return (
            12
            + sum(color.size for color in self.colors)
            + sum(color.size for color in self.world_colors)
        )

    def to_bytes(self) -> bytes:
        writer = BinaryIO()
        self._write_colors(writer)
        writer.write_uint32(len(self.world_colors), _BE)
        for color in self.world_colors:
            writer.write_bytes(color.to_bytes())
        return writer.getvalue()


@dataclass
class ColorFileOld(ColorFileCommons):
    """The older colour table, without world colours."""

    @classmethod
    def from_bytes(cls, data: bytes) -> ColorFileOld:
        reader = BinaryIO(data)
        version = reader.read_uint32(_BE)
        colors = [Color.read(reader) for _ in range(reader.read_uint32(_BE))]
        return cls(colors=colors, version=version)

    @property
    def size(self) -> int:
        return 8 + sum(color.size for color in self.colors)

    def to_bytes(self) -> bytes:
        writer = BinaryIO()
        self._write_colors(writer)
        return writer.getvalue()