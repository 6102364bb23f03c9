import struct

import pytest
from hypothesis import given, strategies as st

from lcekit.binaryio import ByteOrder
from lcekit.save import (
    SaveFile,
    SaveFileOld,
    SaveFileVersion,
    get_version_from_data,
)

ENDIANS = [ByteOrder.LITTLE, ByteOrder.BIG]


def _prefix(endian):
    return "<" if endian is ByteOrder.LITTLE else ">"


def _fill(save):
    save.create_file_recursive("level.dat", b"\x01\x02\x03")
    save.create_file_recursive("data/map_0.dat", b"xyz!")
    return save


@pytest.mark.parametrize("endian", ENDIANS)
def test_savefile_round_trip(endian):
    save = _fill(SaveFile(endian))
    save.original_version = 7
    save.version = 9
    again = SaveFile.from_bytes(save.to_bytes(), endian)
    assert again.get_by_path("level.dat").data == b"\x01\x02\x03"
    assert again.get_by_path("data/map_0.dat").data == b"xyz!"
    assert (again.original_version, again.version) == (7, 9)
    assert again.endian is endian


@pytest.mark.parametrize("endian", ENDIANS)
def test_old_round_trip(endian):
    save = _fill(SaveFileOld(endian))
    again = SaveFileOld.from_bytes(save.to_bytes(), endian)
    assert again.get_by_path("level.dat").data == b"\x01\x02\x03"
    assert again.get_by_path("data/map_0.dat").data == b"xyz!"


def test_old_defaults_to_big_endian():
    save = _fill(SaveFileOld(ByteOrder.BIG))
    again = SaveFileOld.from_bytes(save.to_bytes())
    assert again.endian is ByteOrder.BIG
    assert again.get_by_path("level.dat").data == b"\x01\x02\x03"


def test_default_versions():
    save = SaveFile()
    assert (save.original_version, save.version) == (11, 11)
    assert save.endian is ByteOrder.LITTLE


@pytest.mark.parametrize("cls", [SaveFile, SaveFileOld])
def test_size_matches_output(cls):
    save = _fill(cls(ByteOrder.LITTLE))
    data = save.to_bytes()
    assert len(data) == save.size
    assert save.size == 12 + 2 * cls.INDEX_ENTRY_SIZE + 7


def test_entry_sizes():
    new = SaveFile()
    new.create_file_recursive("a", b"")
    old = SaveFileOld()
    old.create_file_recursive("a", b"")
    assert SaveFile.INDEX_ENTRY_SIZE == 144
    assert SaveFileOld.INDEX_ENTRY_SIZE == 136
    assert len(new.to_bytes()) == 12 + 144
    assert len(old.to_bytes()) == 12 + 136


@pytest.mark.parametrize("endian", ENDIANS)
def test_header_layout(endian):
    save = _fill(SaveFile(endian))
    data = save.to_bytes()
    index_offset, count = struct.unpack(_prefix(endian) + "II", data[:8])
    assert index_offset == save.calculate_index_offset() == 12 + 7
    assert count == 2


def test_old_header_count_field_is_index_size():
    save = _fill(SaveFileOld(ByteOrder.BIG))
    data = save.to_bytes()
    assert struct.unpack(">I", data[4:8])[0] == 2 * 136


@pytest.mark.parametrize("endian", ENDIANS)
def test_entry_name_encoding(endian):
    save = _fill(SaveFile(endian))
    data = save.to_bytes()
    start = save.calculate_index_offset()
    expected = "level.dat".encode(endian.utf16).ljust(128, b"\x00")
    assert data[start:start + 128] == expected


def test_savefile_stores_modified_timestamp():
    save = _fill(SaveFile(ByteOrder.LITTLE))
    data = save.to_bytes()
    start = save.calculate_index_offset() + 128 + 8
    stamp = struct.unpack("<Q", data[start:start + 8])[0]
    assert stamp == save.get_by_path("level.dat").modified_time


def test_long_names_are_truncated_to_64_units():
    save = SaveFile()
    save.create_file_recursive("a" * 70, b"q")
    again = SaveFile.from_bytes(save.to_bytes())
    assert again.get_by_path("a" * 64).data == b"q"
    assert again.get_by_path("a" * 70) is None


@pytest.mark.parametrize("endian", ENDIANS)
def test_get_version_from_data(endian):
    save = SaveFile(endian, version=SaveFileVersion.TU14)
    assert get_version_from_data(save.to_bytes(), endian) == SaveFileVersion.TU14


def test_switching_endian():
    save = SaveFile.from_bytes(_fill(SaveFile(ByteOrder.LITTLE)).to_bytes())
    save.endian = ByteOrder.BIG
    again = SaveFile.from_bytes(save.to_bytes(), ByteOrder.BIG)
    assert again.get_by_path("data/map_0.dat").data == b"xyz!"
    assert again.root.file_count == 2


def test_index_offset_out_of_bounds():
    data = struct.pack("<I", 1000) + bytes(8)
    with pytest.raises(ValueError):
        SaveFile.from_bytes(data)


def test_file_count_too_large():
    data = struct.pack("<II", 12, 0xFFFFFFFF) + bytes(4)
    with pytest.raises(ValueError):
        SaveFile.from_bytes(data)


def test_truncated_index_raises():
    data = _fill(SaveFile(ByteOrder.LITTLE)).to_bytes()[:-10]
    with pytest.raises(EOFError):
        SaveFile.from_bytes(data)


def test_empty_save_round_trip():
    data = SaveFile().to_bytes()
    assert len(data) == 12
    assert SaveFile.from_bytes(data).root.file_count == 0


def test_upgrade_moves_files_and_sets_versions():
    old = _fill(SaveFileOld(ByteOrder.BIG))
    old.version = 8
    new = old.upgrade(9)
    assert (new.original_version, new.version) == (8, 9)
    assert new.get_by_path("level.dat").data == b"\x01\x02\x03"
    assert new.get_by_path("data/map_0.dat").data == b"xyz!"
    assert len(old.root) == 0


def test_upgrade_to_low_version_clears_original():
    old = _fill(SaveFileOld(ByteOrder.BIG))
    new = old.upgrade()
    assert (new.original_version, new.version) == (0, 2)
    assert new.root.file_count == 2


def test_upgrade_rejects_version_one():
    with pytest.raises(ValueError):
        SaveFileOld().upgrade(1)


@given(
    st.dictionaries(
        keys=st.text(alphabet="abcdefgh", min_size=1, max_size=10),
        values=st.binary(max_size=50),
        max_size=5,
    ),
    st.sampled_from(ENDIANS),
)
def test_round_trip_property(files, endian):
    save = SaveFile(endian)
    for name, payload in files.items():
        save.create_file_recursive(name, payload)
    data = save.to_bytes()
    assert len(data) == save.size
    again = SaveFile.from_bytes(data, endian)
    assert {name: again.get_by_path(name).data for name in files} == files