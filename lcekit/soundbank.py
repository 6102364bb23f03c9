"""MSSCMP sound banks: an index of named Binka audio streams."""

from __future__ import annotations

import enum

from .binaryio import BinaryIO, ByteOrder, trim_nulls
from .filesystem import Directory, File, Filesystem

__all__ = ["Generation", "BinkaFile", "Soundbank"]

_BIG_ENDIAN_MAGIC = "BANK"
_GENERATION_PROBE_OFFSET = 0x18
_BANK_NAME_SIZE = 12
_BINKA_SUFFIX = ".binka"


class Generation(enum.Enum):
    """Console generation of a sound bank, which decides its field widths."""

    OLD_GEN = 0  # 32-bit offsets
    NEW_GEN = 1  # 64-bit offsets

    @property
    def opposite(self) -> Generation:
        return Generation.OLD_GEN if self is Generation.NEW_GEN else Generation.NEW_GEN


def _read_by_generation(reader: BinaryIO, endian: ByteOrder, generation: Generation) -> int:
    if generation is Generation.NEW_GEN:
        return reader.read_uint64(endian)
    return reader.read_uint32(endian)


class BinkaFile(File):
    """A Binka audio stream together with its sample rate."""

    def __init__(
        self,
        name: str,
        data: bytes = b"",
        sample_rate: int = 0,
        parent: Directory | None = None,
    ) -> None:
        super().__init__(name, data, parent)
        self.sample_rate = sample_rate


class Soundbank(Filesystem):
    """A sound bank held as a tree of :class:`BinkaFile` objects."""

    def __init__(
        self,
        byte_order: ByteOrder = ByteOrder.LITTLE,
        generation: Generation = Generation.NEW_GEN,
        name: str = "",
    ) -> None:
        super().__init__()
        self.byte_order = byte_order
        self.generation = generation
        self.name = name
        self.index2_size = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> Soundbank:
        """Parse a sound bank; each entry becomes "<path>.binka" in the tree.

        The byte order comes from the magic ("BANK" is big-endian) and the
        generation from whether the two 32-bit values at 0x18 differ.
        """
        reader = BinaryIO(data)
        magic = reader.read_utf8(4)
        endian = ByteOrder.BIG if magic == _BIG_ENDIAN_MAGIC else ByteOrder.LITTLE

        reader.seek(_GENERATION_PROBE_OFFSET)
        first = reader.read_uint32(endian)
        second = reader.read_uint32(endian)
        generation = Generation.NEW_GEN if first != second else Generation.OLD_GEN

        reader.seek(4)
        reader.read_uint32(endian)  # unknown
        _read_by_generation(reader, endian, generation)  # start of data
        reader.read_uint64(endian)  # unknown
        _read_by_generation(reader, endian, generation)  # first entry offset
        last_entry_offset = _read_by_generation(reader, endian, generation)
        reader.read_uint64(endian)  # unknown
        if generation is Generation.NEW_GEN:
            reader.read_uint64(endian)  # unknown
        _read_by_generation(reader, endian, generation)  # unknown
        _read_by_generation(reader, endian, generation)  # first index size
        reader.read_uint32(endian)  # unknown
        index2_size = _read_by_generation(reader, endian, generation.opposite)
        name = trim_nulls(reader.read_utf8(_BANK_NAME_SIZE))

        bank = cls(endian, generation, name)
        bank.index2_size = index2_size

        for i in range(index2_size):
            reader.seek(last_entry_offset + 4 + i * 8)
            entry_offset = reader.read_uint32(endian)
            reader.read_uint32(endian)  # file structure offset

            reader.seek(entry_offset)
            name_offset = reader.read_uint32(endian)
            resume = reader.position
            reader.seek(name_offset)
            file_name = reader.read_utf8_null_terminated()
            reader.seek(resume)

            reader.read_uint32(endian)  # unknown
            data_offset = reader.read_uint32(ByteOrder.LITTLE)  # always little-endian
            reader.read_uint32(endian)  # unknown
            reader.read_uint32(endian)  # unknown
            sample_rate = reader.read_uint32(endian)
            file_size = reader.read_uint32(endian)

            reader.seek(data_offset)
            payload = reader.read_bytes(file_size)

            parent_path, _, base = file_name.rpartition("/")
            directory = bank.get_or_create_dir_by_path(parent_path) if parent_path else bank.root
            try:
                directory.add_child(BinkaFile(base + _BINKA_SUFFIX, payload, sample_rate))
            except FileExistsError:
                # a later entry with a name already taken is dropped
                continue
        return bank