"""Positioned reading and writing of little- and big-endian binary data."""

from __future__ import annotations

import enum
import struct

__all__ = ["ByteOrder", "BinaryIO", "trim_nulls"]


class ByteOrder(enum.Enum):
    """Byte order of multi-byte values."""

    BIG = "big"
    LITTLE = "little"

    @property
    def struct_prefix(self) -> str:
        return ">" if self is ByteOrder.BIG else "<"

    @property
    def utf16(self) -> str:
        return "utf-16-be" if self is ByteOrder.BIG else "utf-16-le"

    @property
    def utf32(self) -> str:
        return "utf-32-be" if self is ByteOrder.BIG else "utf-32-le"


_UNSIGNED = {1: "B", 2: "H", 4: "I", 8: "Q"}
_SIGNED = {1: "b", 2: "h", 4: "i", 8: "q"}


def trim_nulls(text: str) -> str:
    """Strip trailing NUL characters from *text*."""
    return text.rstrip("\x00")


class BinaryIO:
    """A growable byte buffer with a cursor.

    Reads past the end of the buffer raise :class:`EOFError`; writes past the
    end grow it, filling any gap with zero bytes.
    """

    def __init__(self, data: bytes | bytearray | memoryview | int = b"") -> None:
        if isinstance(data, int):
            if data < 0:
                raise ValueError("buffer size cannot be negative")
            self._buffer = bytearray(data)
        else:
            self._buffer = bytearray(data)
        self._pos = 0

    def __len__(self) -> int:
        return len(self._buffer)

    # cursor ----------------------------------------------------------------

    def seek(self, offset: int) -> None:
        """Move the cursor to an absolute offset."""
        if offset < 0:
            raise ValueError(f"cannot seek to negative offset {offset}")
        self._pos = offset

    def seek_relative(self, offset: int) -> None:
        """Move the cursor by *offset* bytes."""
        self.seek(self._pos + offset)

    @property
    def position(self) -> int:
        """The current cursor offset."""
        return self._pos

    def getvalue(self) -> bytes:
        """Return the whole buffer."""
        return bytes(self._buffer)

    # raw access ------------------------------------------------------------

    def read_bytes(self, size: int) -> bytes:
        """Read *size* bytes and advance past them."""
        if size < 0:
            raise ValueError(f"cannot read a negative number of bytes ({size})")
        end = self._pos + size
        if end > len(self._buffer):
            raise EOFError(
                f"read of {size} bytes at offset {self._pos} runs past the end "
                f"of a {len(self._buffer)}-byte buffer"
            )
        chunk = bytes(self._buffer[self._pos:end])
        self._pos = end
        return chunk

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Write *data* at the cursor and advance past it."""
        end = self._pos + len(data)
        if end > len(self._buffer):
            self._buffer.extend(bytes(end - len(self._buffer)))
        self._buffer[self._pos:end] = data
        self._pos = end

    def _read_int(self, size: int, signed: bool, endian: ByteOrder) -> int:
        code = (_SIGNED if signed else _UNSIGNED)[size]
        return struct.unpack(endian.struct_prefix + code, self.read_bytes(size))[0]

    def _write_int(self, value: int, size: int, endian: ByteOrder) -> None:
        masked = value & ((1 << (size * 8)) - 1)
        self.write_bytes(struct.pack(endian.struct_prefix + _UNSIGNED[size], masked))

    # reading ---------------------------------------------------------------

    def read_byte(self) -> int:
        return self._read_int(1, False, ByteOrder.BIG)

    def read_signed_byte(self) -> int:
        return self._read_int(1, True, ByteOrder.BIG)

    def read_uint16(self, endian: ByteOrder) -> int:
        return self._read_int(2, False, endian)

    def read_int16(self, endian: ByteOrder) -> int:
        return self._read_int(2, True, endian)

    def read_uint24(self, endian: ByteOrder) -> int:
        return int.from_bytes(self.read_bytes(3), endian.value, signed=False)

    def read_int24(self, endian: ByteOrder) -> int:
        return int.from_bytes(self.read_bytes(3), endian.value, signed=True)

    def read_uint32(self, endian: ByteOrder) -> int:
        return self._read_int(4, False, endian)

    def read_int32(self, endian: ByteOrder) -> int:
        return self._read_int(4, True, endian)

    def read_uint64(self, endian: ByteOrder) -> int:
        return self._read_int(8, False, endian)

    def read_int64(self, endian: ByteOrder) -> int:
        return self._read_int(8, True, endian)

    # writing (values are truncated to the field width) ---------------------

    def write_byte(self, value: int) -> None:
        self._write_int(value, 1, ByteOrder.BIG)

    def write_signed_byte(self, value: int) -> None:
        self._write_int(value, 1, ByteOrder.BIG)

    def write_uint16(self, value: int, endian: ByteOrder) -> None:
        self._write_int(value, 2, endian)

    def write_int16(self, value: int, endian: ByteOrder) -> None:
        self._write_int(value, 2, endian)

    def write_uint32(self, value: int, endian: ByteOrder) -> None:
        self._write_int(value, 4, endian)

    def write_int32(self, value: int, endian: ByteOrder) -> None:
        self._write_int(value, 4, endian)

    def write_uint64(self, value: int, endian: ByteOrder) -> None:
        self._write_int(value, 8, endian)

    def write_int64(self, value: int, endian: ByteOrder) -> None:
        self._write_int(value, 8, endian)

    # strings ---------------------------------------------------------------

    def read_utf8(self, size: int) -> str:
        """Read *size* bytes as UTF-8; undecodable bytes survive a round trip."""
        return self.read_bytes(size).decode("utf-8", "surrogateescape")

    def read_utf8_null_terminated(self) -> str:
        """Read UTF-8 up to a NUL byte and advance past the NUL."""
        end = self._buffer.find(0, self._pos)
        if end < 0:
            raise EOFError(f"no NUL terminator after offset {self._pos}")
        text = self.read_utf8(end - self._pos)
        self._pos += 1
        return text

    def write_utf8(self, text: str) -> None:
        self.write_bytes(text.encode("utf-8", "surrogateescape"))

    def _find_unit_terminator(self, width: int) -> int:
        end = self._pos
        while True:
            unit = self._buffer[end:end + width]
            if len(unit) < width:
                raise EOFError(f"no NUL terminator after offset {self._pos}")
            if not any(unit):
                return (end - self._pos) // width
            end += width

    def read_wchar2(self, size: int, endian: ByteOrder) -> str:
        """Read *size* UTF-16 code units."""
        return self.read_bytes(size * 2).decode(endian.utf16, "surrogatepass")

    def read_wchar2_nt(self, endian: ByteOrder) -> str:
        """Read NUL-terminated UTF-16 and advance past the terminator."""
        text = self.read_wchar2(self._find_unit_terminator(2), endian)
        self._pos += 2
        return text

    def write_wchar2(self, text: str, endian: ByteOrder, null_terminate: bool = False) -> None:
        self.write_bytes(text.encode(endian.utf16, "surrogatepass"))
        if null_terminate:
            self.write_bytes(bytes(2))

    def read_wchar4(self, size: int, endian: ByteOrder) -> str:
        """Read *size* UTF-32 code units."""
        return self.read_bytes(size * 4).decode(endian.utf32, "surrogatepass")

    def read_wchar4_nt(self, endian: ByteOrder) -> str:
        """Read NUL-terminated UTF-32 and advance past the terminator."""
        text = self.read_wchar4(self._find_unit_terminator(4), endian)
        self._pos += 4
        return text

    def write_wchar4(self, text: str, endian: ByteOrder, null_terminate: bool = False) -> None:
        self.write_bytes(text.encode(endian.utf32, "surrogatepass"))
        if null_terminate:
            self.write_bytes(bytes(4))