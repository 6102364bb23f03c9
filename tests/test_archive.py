import struct

import pytest
from hypothesis import given, strategies as st

from lcekit.archive import Archive


def _single_entry_bytes(name: bytes, payload: bytes) -> bytes:
    offset = 4 + 2 + len(name) + 8
    return (
        struct.pack(">I", 1)
        + struct.pack(">H", len(name))
        + name
        + struct.pack(">II", offset, len(payload))
        + payload
    )


def test_reads_single_entry():
    archive = Archive.from_bytes(_single_entry_bytes(b"a.txt", b"abc"))
    assert archive.get_by_path("a.txt").data == b"abc"
    assert archive.root.file_count == 1


def test_writes_single_entry_wire_bytes():
    archive = Archive()
    archive.create_file_recursive("a.txt", b"abc")
    assert archive.to_bytes() == _single_entry_bytes(b"a.txt", b"abc")


def test_offset_of_single_entry():
    archive = Archive()
    archive.create_file_recursive("a.txt", b"abc")
    data = archive.to_bytes()
    assert struct.unpack(">I", data[11:15])[0] == 19


def test_empty_archive():
    assert Archive().to_bytes() == b"\x00\x00\x00\x00"
    assert Archive().size == 4


def test_backslash_paths_become_directories():
    archive = Archive.from_bytes(_single_entry_bytes(b"dir\\b.bin", b"\x00\x01"))
    assert archive.root.get_child("dir").is_file is False
    assert archive.get_by_path("dir/b.bin").data == b"\x00\x01"


def test_nested_paths_written_with_backslashes():
    archive = Archive()
    archive.create_file_recursive("dir/b.bin", b"zz")
    data = archive.to_bytes()
    assert b"dir\\b.bin" in data
    assert b"dir/b.bin" not in data


def test_size_matches_serialized_length():
    archive = Archive()
    archive.create_file_recursive("one.txt", b"1" * 10)
    archive.create_file_recursive("sub/two.txt", b"22")
    archive.create_file_recursive("sub/deeper/three", b"")
    assert archive.size == len(archive.to_bytes())


def test_round_trip_preserves_tree():
    archive = Archive()
    archive.create_file_recursive("one.txt", b"first")
    archive.create_file_recursive("sub/two.txt", b"second")
    again = Archive.from_bytes(archive.to_bytes())
    assert again.get_by_path("one.txt").data == b"first"
    assert again.get_by_path("sub/two.txt").data == b"second"
    assert again.to_bytes() == archive.to_bytes()


def test_duplicate_entries_keep_first():
    first = _single_entry_bytes(b"a", b"x")
    # two entries of the same name pointing at the same payload
    offset = 4 + 2 * (2 + 1 + 8)
    data = (
        struct.pack(">I", 2)
        + struct.pack(">H", 1) + b"a" + struct.pack(">II", offset, 1)
        + struct.pack(">H", 1) + b"a" + struct.pack(">II", offset + 1, 1)
        + b"xy"
    )
    archive = Archive.from_bytes(data)
    assert archive.root.file_count == 1
    assert archive.get_by_path("a").data == first[-1:]


def test_truncated_archive_raises():
    data = _single_entry_bytes(b"a.txt", b"abc")[:-1]
    with pytest.raises(EOFError):
        Archive.from_bytes(data)


@given(
    st.dictionaries(
        keys=st.text(alphabet="abcdefghij", min_size=1, max_size=8),
        values=st.binary(max_size=40),
        max_size=6,
    )
)
def test_round_trip_property(files):
    archive = Archive()
    for name, payload in files.items():
        archive.create_file_recursive(name, payload)
    again = Archive.from_bytes(archive.to_bytes())
    assert {name: again.get_by_path(name).data for name in files} == files
    assert again.size == archive.size