"""Save-file containers: a header, the stored files, then an index of them."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterator

from .binaryio import BinaryIO, ByteOrder, trim_nulls
from .filesystem import Directory, File, Filesystem

__all__ = [
    "SaveFileVersion",
    "SaveFileCommons",
    "SaveFile",
    "SaveFileOld",
    "get_version_from_data",
]

_MAX_U32 = 0xFFFFFFFF
_NAME_UNITS = 64


class SaveFileVersion(enum.IntEnum):
    PR = 1
    TU0054 = 2
    TU5 = 3
    TU9 = 4
    TU14 = 5
    TU17 = 6
    TU19 = 7
    TU36 = 8
    TU69 = 9


def get_version_from_data(data: bytes, endian: ByteOrder = ByteOrder.LITTLE) -> int:
    """Read the version field (offset 10) of a serialized save."""
    reader = BinaryIO(data)
    reader.seek(10)
    return reader.read_uint16(endian)


def _iter_files(root: Directory) -> Iterator[File]:
    stack = [root]
    while stack:
        directory = stack.pop()
        for child in directory:
            if isinstance(child, Directory):
                stack.append(child)
            elif isinstance(child, File):
                yield child


def _encode_name(name: str, endian: ByteOrder) -> bytes:
    encoded = name.encode(endian.utf16, "surrogatepass")[: _NAME_UNITS * 2]
    return encoded.ljust(_NAME_UNITS * 2, b"\x00")


class SaveFileCommons(Filesystem, ABC):
    """Behaviour shared by both save-file layouts."""

    HEADER_SIZE = 12
    INDEX_ENTRY_SIZE = 0

    def __init__(
        self,
        endian: ByteOrder = ByteOrder.LITTLE,
        original_version: int = 11,
        version: int = 11,
    ) -> None:
        super().__init__()
        self.endian = endian
        self.original_version = original_version
        self.version = version

    @property
    def size(self) -> int:
        """Size in bytes of the serialized save."""
        files = list(_iter_files(self.root))
        return (
            self.HEADER_SIZE
            + len(files) * self.INDEX_ENTRY_SIZE
            + sum(file.size for file in files)
        )

    def calculate_index_offset(self) -> int:
        """Offset at which the index starts: right after all file data."""
        return self.HEADER_SIZE + self.root.size

    def to_bytes(self) -> bytes:
        """Serialize the save in its own byte order."""
        endian = self.endian
        index_offset = self.calculate_index_offset()
        if index_offset > _MAX_U32 - self.HEADER_SIZE:
            raise ValueError("Index offset is too big to be stored in a 32-bit integer.")

        files = list(_iter_files(self.root))
        writer = BinaryIO(self.size)
        writer.write_uint32(index_offset, endian)
        writer.write_uint32(self._encode_file_count(len(files)), endian)
        writer.write_uint16(self.original_version, endian)
        writer.write_uint16(self.version, endian)

        offsets = []
        for file in files:
            offsets.append(writer.position)
            writer.write_bytes(file.data)

        for file, offset in zip(files, offsets):
            writer.write_bytes(_encode_name(file.path[1:], endian))
            writer.write_uint32(file.size, endian)
            writer.write_uint32(offset, endian)
            self._write_entry_tail(writer, file)
        return writer.getvalue()

    @classmethod
    def _read(cls, data: bytes, endian: ByteOrder) -> SaveFileCommons:
        save = cls(endian)
        reader = BinaryIO(data)

        index_offset = reader.read_uint32(endian)
        if index_offset > len(data):
            raise ValueError(
                "Index offset points to an area that is out of bounds of the data given."
            )

        file_count = cls._decode_file_count(reader.read_uint32(endian))
        if file_count > (_MAX_U32 - cls.HEADER_SIZE) // cls.INDEX_ENTRY_SIZE:
            raise ValueError(
                f"File count ({file_count}) makes the file too big for its index "
                "offset to be stored in a 32-bit integer."
            )

        save.original_version = reader.read_uint16(endian)
        save.version = reader.read_uint16(endian)

        for i in range(file_count):
            reader.seek(index_offset + i * cls.INDEX_ENTRY_SIZE)
            name = trim_nulls(reader.read_wchar2(_NAME_UNITS, endian))
            size = reader.read_uint32(endian)
            offset = reader.read_uint32(endian)
            cls._read_entry_tail(reader, endian)

            reader.seek(offset)
            payload = reader.read_bytes(size)
            try:
                save.create_file_recursive(name, payload)
            except (FileExistsError, NotADirectoryError, ValueError):
                # duplicate or unplaceable entries are skipped
                continue
        return save

    @staticmethod
    @abstractmethod
    def _encode_file_count(count: int) -> int:
        """Value stored in the header's file-count field."""

    @staticmethod
    @abstractmethod
    def _decode_file_count(raw: int) -> int:
        """Number of index entries given the header's file-count field."""

    @abstractmethod
    def _write_entry_tail(self, writer: BinaryIO, file: File) -> None:
        """Write whatever follows the size and offset of an index entry."""

    @staticmethod
    @abstractmethod
    def _read_entry_tail(reader: BinaryIO, endian: ByteOrder) -> None:
        """Skip whatever follows the size and offset of an index entry."""


class SaveFile(SaveFileCommons):
    """The current save layout: 144-byte index entries with a timestamp."""

    INDEX_ENTRY_SIZE = 144

    @classmethod
    def from_bytes(cls, data: bytes, endian: ByteOrder = ByteOrder.LITTLE) -> SaveFile:
        """Parse a save in the current layout."""
        return cls._read(data, endian)

    @staticmethod
    def _encode_file_count(count: int) -> int:
        return count

    @staticmethod
    def _decode_file_count(raw: int) -> int:
        return raw

    def _write_entry_tail(self, writer: BinaryIO, file: File) -> None:
        writer.write_uint64(file.modified_time, self.endian)

    @staticmethod
    def _read_entry_tail(reader: BinaryIO, endian: ByteOrder) -> None:
        reader.read_uint64(endian)  # stored timestamp is not used


class SaveFileOld(SaveFileCommons):
    """The oldest save layout: 136-byte index entries, index size in the header."""

    INDEX_ENTRY_SIZE = 136

    def __init__(
        self,
        endian: ByteOrder = ByteOrder.BIG,
        original_version: int = 11,
        version: int = 11,
    ) -> None:
        super().__init__(endian, original_version, version)

    @classmethod
    def from_bytes(cls, data: bytes, endian: ByteOrder = ByteOrder.BIG) -> SaveFileOld:
        """Parse a save in the old layout (big-endian by default)."""
        return cls._read(data, endian)

    @classmethod
    def _encode_file_count(cls, count: int) -> int:
        return count * cls.INDEX_ENTRY_SIZE

    @classmethod
    def _decode_file_count(cls, raw: int) -> int:
        return raw // cls.INDEX_ENTRY_SIZE

    def _write_entry_tail(self, writer: BinaryIO, file: File) -> None:
        return None

    @staticmethod
    def _read_entry_tail(reader: BinaryIO, endian: ByteOrder) -> None:
        return None

    def upgrade(self, version: int = 2) -> SaveFile:
        """Move every file into a new-layout save with the given header version.

        The original version becomes this save's version when *version* is
        above 3, and 0 otherwise. This save is left empty.
        """
        if version <= 1:
            raise ValueError(
                "Version must be greater than 1. "
                "(otherwise it's not really a migration now is it?)"
            )
        original = self.version if version > 3 else 0
        upgraded = SaveFile(original_version=original, version=version)
        for name in list(self.root.children):
            self.root.move_child(name, upgraded.root)
        return upgraded