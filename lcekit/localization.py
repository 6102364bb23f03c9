"""Localization files: language ids and per-language string tables."""

from __future__ import annotations

from dataclasses import dataclass, field

from .binaryio import BinaryIO, ByteOrder

__all__ = ["Language", "LocalizationFile"]

_BE = ByteOrder.BIG
_MAX_STRING_LENGTH = 0xFFFF


def _encode(text: str) -> bytes:
    encoded = text.encode("utf-8", "surrogateescape")
    if len(encoded) > _MAX_STRING_LENGTH:
        raise ValueError(f"string is too long ({len(encoded)} bytes)")
    return encoded


def _write_string(writer: BinaryIO, text: str) -> None:
    encoded = _encode(text)
    writer.write_uint16(len(encoded), _BE)
    writer.write_bytes(encoded)


def _read_string(reader: BinaryIO) -> str:
    return reader.read_utf8(reader.read_uint16(_BE))


@dataclass
class Language:
    """The strings of one language.

    The extra *byte* is only stored when *should_read_byte* is non-zero.
    """

    code: str
    strings: list[str] = field(default_factory=list)
    should_read_byte: int = 0
    byte: int = 0

    @property
    def string_count(self) -> int:
        return len(self.strings)

    @classmethod
    def read(cls, reader: BinaryIO) -> Language:
        should_read_byte = reader.read_uint32(_BE)
        byte = reader.read_byte() if should_read_byte > 0 else 0
        code = _read_string(reader)
        count = reader.read_uint32(_BE)
        strings = [_read_string(reader) for _ in range(count)]
        return cls(code, strings, should_read_byte, byte)

    @property
    def size(self) -> int:
        total = 4 + (1 if self.should_read_byte > 0 else 0)
        total += 2 + len(_encode(self.code)) + 4
        return total + sum(2 + len(_encode(text)) for text in self.strings)

    def to_bytes(self) -> bytes:
        writer = BinaryIO()
        writer.write_uint32(self.should_read_byte, _BE)
        if self.should_read_byte > 0:
            writer.write_byte(self.byte)
        _write_string(writer, self.code)
        writer.write_uint32(len(self.strings), _BE)
        for text in self.strings:
            _write_string(writer, text)
        return writer.getvalue()


@dataclass
class LocalizationFile:
    """A localization file: language ids followed by one table per language.

    Version 2 files also carry a unique-id flag and a list of string keys.
    """

    version: int = 1
    lang_ids: dict[int, str] = field(default_factory=dict)
    languages: list[Language] = field(default_factory=list)
    keys: list[int] = field(default_factory=list)
    use_unique_ids: bool = False

    @property
    def language_count(self) -> int:
        return len(self.languages)

    @property
    def key_count(self) -> int:
        return len(self.keys)

    @classmethod
    def from_bytes(cls, data: bytes) -> LocalizationFile:
        reader = BinaryIO(data)
        loc = cls(version=reader.read_uint32(_BE))
        language_count = reader.read_uint32(_BE)

        if loc.version == 2:
            loc.use_unique_ids = bool(reader.read_byte())
            key_count = reader.read_uint32(_BE)
            loc.keys = [reader.read_uint32(_BE) for _ in range(key_count)]

        for _ in range(language_count):
            code = _read_string(reader)
            loc.lang_ids[reader.read_uint32(_BE)] = code

        loc.languages = [Language.read(reader) for _ in range(language_count)]
        return loc

    @property
    def size(self) -> int:
        total = 8
        if self.version == 2:
            total += 1 + 4 + 4 * len(self.keys)
        total += sum(2 + len(_encode(code)) + 4 for code in self.lang_ids.values())
        return total + sum(language.size for language in self.languages)

    def to_bytes(self) -> bytes:
        if len(self.lang_ids) != len(self.languages):
            raise ValueError(
                f"{len(self.lang_ids)} language ids do not match "
                f"{len(self.languages)} languages"
            )
        writer = BinaryIO()
        writer.write_uint32(self.version, _BE)
        writer.write_uint32(len(self.languages), _BE)

        if self.version == 2:
            writer.write_byte(int(self.use_unique_ids))
            writer.write_uint32(len(self.keys), _BE)
            for key in self.keys:
                writer.write_uint32(key, _BE)

        for lang_id, code in self.lang_ids.items():
            _write_string(writer, code)
            writer.write_uint32(lang_id, _BE)

        for language in self.languages:
            writer.write_bytes(language.to_bytes())
        return writer.getvalue()