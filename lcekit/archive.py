"""The ARC archive format: a big-endian index of paths followed by file data."""

from __future__ import annotations

from collections.abc import Iterator

from .binaryio import BinaryIO, ByteOrder
from .filesystem import (
    Directory,
    File,
    Filesystem,
    unix_to_windows_delimiter,
    windows_to_unix_delimiter,
)

__all__ = ["Archive"]

_BE = ByteOrder.BIG
_MAX_NAME_LENGTH = 0xFFFF


def _iter_files(root: Directory) -> Iterator[File]:
    """Yield every file below *root*, visiting directories depth first."""
    stack = [root]
    while stack:
        directory = stack.pop()
        for child in directory:
            if isinstance(child, Directory):
                stack.append(child)
            elif isinstance(child, File):
                yield child


def _entry_name(file: File) -> bytes:
    name = unix_to_windows_delimiter(file.path[1:]).encode("utf-8", "surrogateescape")
    if len(name) > _MAX_NAME_LENGTH:
        raise ValueError(f"path {file.path!r} is too long for an archive entry")
    return name


class Archive(Filesystem):
    """An ARC archive held as an in-memory file tree."""

    @classmethod
    def from_bytes(cls, data: bytes) -> Archive:
        """Parse an ARC archive; backslash paths become slash paths."""
        archive = cls()
        reader = BinaryIO(data)
        count = reader.read_uint32(_BE)
        for _ in range(count):
            name = reader.read_utf8(reader.read_uint16(_BE))
            offset = reader.read_uint32(_BE)
            size = reader.read_uint32(_BE)

            entry_end = reader.position
            reader.seek(offset)
            payload = reader.read_bytes(size)
            reader.seek(entry_end)

            try:
                archive.create_file_recursive(windows_to_unix_delimiter(name), payload)
            except (FileExistsError, NotADirectoryError, ValueError):
                # duplicate or unplaceable entries are skipped
                continue
        return archive

    @property
    def size(self) -> int:
        """Size in bytes of the serialized archive."""
        return 4 + sum(
            2 + len(_entry_name(file)) + 8 + file.size for file in _iter_files(self.root)
        )

    def to_bytes(self) -> bytes:
        """Serialize the archive."""
        entries = [(_entry_name(file), file) for file in _iter_files(self.root)]
        offset = 4 + sum(2 + len(name) + 8 for name, _ in entries)

        writer = BinaryIO(self.size)
        writer.write_uint32(len(entries), _BE)
        for name, file in entries:
            writer.write_uint16(len(name), _BE)
            writer.write_bytes(name)
            writer.write_uint32(offset, _BE)
            writer.write_uint32(file.size, _BE)
            offset += file.size
        for _, file in entries:
            writer.write_bytes(file.data)
        return writer.getvalue()