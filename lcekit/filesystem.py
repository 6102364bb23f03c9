"""An in-memory tree of named files and directories."""

from __future__ import annotations

import sys
import time
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from types import MappingProxyType

__all__ = [
    "get_timestamp",
    "windows_to_unix_delimiter",
    "unix_to_windows_delimiter",
    "FSObject",
    "File",
    "Directory",
    "Filesystem",
]


def get_timestamp() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def windows_to_unix_delimiter(name: str) -> str:
    """Replace every backslash in *name* with a forward slash."""
    return name.replace("\\", "/")


def unix_to_windows_delimiter(name: str) -> str:
    """Replace every forward slash in *name* with a backslash."""
    return name.replace("/", "\\")


class FSObject(ABC):
    """A named node of the tree with creation and modification times."""

    def __init__(self, name: str, parent: Directory | None = None) -> None:
        now = get_timestamp()
        self._name = name
        self.creation_time = now
        self.modified_time = now
        self.parent = parent

    @property
    def name(self) -> str:
        return self._name

    def _rename(self, name: str) -> None:
        self._name = name
        self.modified_time = get_timestamp()

    @property
    @abstractmethod
    def is_file(self) -> bool:
        """Whether this node is a file."""

    @property
    def path(self) -> str:
        """The slash-separated path from the topmost ancestor to this node."""
        chain: list[FSObject] = []
        node: FSObject | None = self
        while node is not None:
            chain.append(node)
            node = node.parent

        parts: list[str] = []
        for obj in reversed(chain):
            if obj.parent is None:
                parts.append(obj.name)
            elif obj.name == "/" or obj.parent.name == "/":
                parts.append(obj.name)
            else:
                parts.append("/" + obj.name)
        return "".join(parts)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


class File(FSObject):
    """A file holding a block of bytes."""

    def __init__(self, name: str, data: bytes = b"", parent: Directory | None = None) -> None:
        super().__init__(name, parent)
        self._data = bytes(data)

    @property
    def is_file(self) -> bool:
        return True

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def size(self) -> int:
        """Length of the file's data in bytes."""
        return len(self._data)


class Directory(FSObject):
    """A directory owning named children."""

    def __init__(self, name: str, parent: Directory | None = None) -> None:
        super().__init__(name, parent)
        self._children: dict[str, FSObject] = {}

    @property
    def is_file(self) -> bool:
        return False

    @property
    def children(self) -> Mapping[str, FSObject]:
        """A read-only view of the children by name."""
        return MappingProxyType(self._children)

    def __contains__(self, name: object) -> bool:
        return name in self._children

    def __iter__(self) -> Iterator[FSObject]:
        return iter(list(self._children.values()))

    def __len__(self) -> int:
        return len(self._children)

    def _ensure_free(self, name: str) -> None:
        if name in self._children:
            raise FileExistsError(f"{name!r} already exists in {self.path!r}")

    def create_file(self, name: str, data: bytes = b"") -> File:
        """Create a file named *name*; names are case-sensitive."""
        self._ensure_free(name)
        child = File(name, data, self)
        self._children[name] = child
        return child

    def create_directory(self, name: str) -> Directory:
        """Create a subdirectory named *name*."""
        self._ensure_free(name)
        child = Directory(name, self)
        self._children[name] = child
        return child

    def get_child(self, name: str) -> FSObject | None:
        """Return the child named *name*, or None if there is none."""
        return self._children.get(name)

    def add_child(self, child: FSObject) -> None:
        """Adopt *child* under its own name."""
        self._ensure_free(child.name)
        child.parent = self
        self._children[child.name] = child

    def remove_child(self, name: str) -> None:
        """Delete the child named *name*."""
        if self._children.pop(name, None) is None:
            raise FileNotFoundError(f"{name!r} does not exist in {self.path!r}")

    def take_child(self, name: str) -> FSObject:
        """Detach and return the child named *name*; its parent is unset."""
        try:
            child = self._children.pop(name)
        except KeyError:
            raise FileNotFoundError(f"{name!r} does not exist in {self.path!r}") from None
        child.parent = None
        return child

    def rename_child(self, old: str, new: str) -> None:
        """Rename the child *old* to *new*."""
        if old == new:
            raise ValueError("old and new names are the same")
        self._ensure_free(new)
        child = self.take_child(old)
        child._rename(new)
        child.parent = self
        self._children[new] = child

    def move_child(self, name: str, to: Directory) -> None:
        """Move the child *name* into the directory *to*."""
        if to is None or to is self:
            raise ValueError("destination must be another directory")
        to._ensure_free(name)
        child = self.take_child(name)
        child.parent = to
        child.modified_time = get_timestamp()
        to._children[name] = child

    def _walk(self) -> Iterator[FSObject]:
        for child in self._children.values():
            yield child
            if isinstance(child, Directory):
                yield from child._walk()

    @property
    def size(self) -> int:
        """Total size of all files below this directory."""
        return sum(obj.size for obj in self._walk() if isinstance(obj, File))

    @property
    def file_count(self) -> int:
        """Number of files below this directory, recursively."""
        return sum(1 for obj in self._walk() if obj.is_file)

    @property
    def directory_count(self) -> int:
        """Number of directories below this directory, recursively."""
        return sum(1 for obj in self._walk() if not obj.is_file)

    def print_listing(self) -> None:
        """Print one line per direct child to standard output: kind, size and name."""
        for child in self._children.values():
            kind = "F" if child.is_file else "D"
            print(f"[{kind} | {child.size}] {child.name}", file=sys.stdout)


def _segments(path: str) -> Iterator[tuple[str, bool]]:
    """Yield the non-empty names of *path* and whether each ends the path."""
    parts = path.split("/")
    last = len(parts) - 1
    for index, part in enumerate(parts):
        if part:
            yield part, index == last


class Filesystem:
    """A tree rooted at a directory named "/"."""

    def __init__(self) -> None:
        self._root = Directory("/")

    @property
    def root(self) -> Directory:
        return self._root

    def get_or_create_dir_by_path(self, path: str) -> Directory:
        """Return the directory at *path*, creating missing directories."""
        if not path:
            raise ValueError("path is empty")
        current = self._root
        for name, _ in _segments(path):
            child = current.get_child(name)
            if child is None:
                child = current.create_directory(name)
            if not isinstance(child, Directory):
                raise NotADirectoryError(f"{child.path!r} is a file")
            current = child
        return current

    def get_by_path(self, path: str) -> FSObject | None:
        """Return the object at *path*, or None if the path names nothing.

        A file is only returned when its name ends the path.
        """
        if not path:
            return None
        current = self._root
        for name, is_last in _segments(path):
            child = current.get_child(name)
            if child is None:
                return None
            if isinstance(child, Directory):
                current = child
            elif is_last:
                return child
            else:
                return None
        return current

    def create_file_recursive(self, path: str, data: bytes = b"") -> File:
        """Create a file at *path*, creating the directories leading to it."""
        if not path:
            raise ValueError("path is empty")
        current = self._root
        for name, is_last in _segments(path):
            child = current.get_child(name)
            if child is None:
                if is_last:
                    return current.create_file(name, data)
                current = current.create_directory(name)
                continue
            if is_last:
                raise FileExistsError(f"{child.path!r} already exists")
            if not isinstance(child, Directory):
                raise NotADirectoryError(f"{child.path!r} is a file")
            current = child
        raise ValueError(f"{path!r} does not name a file")