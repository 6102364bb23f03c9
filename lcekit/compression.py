"""Decompression routines for zlib, chunk RLE and Vita RLE data."""

from __future__ import annotations

import enum
import zlib

from .binaryio import BinaryIO, ByteOrder

__all__ = [
    "CompressionType",
    "CompressionError",
    "decompress_zlib",
    "decompress_zlib_with_length",
    "decompress_chunk",
    "decompress_vita",
    "decompress",
    "get_size_from_save",
]


class CompressionType(enum.IntEnum):
    ZLIB = 0
    LZX = 1
    SPLIT_SAVE = 2
    CHUNK = 3
    VITA = 4
    DEFLATE = 5  # raw deflate, not zlib-wrapped


class CompressionError(Exception):
    """Raised when compressed data cannot be decoded."""


def decompress_zlib(data: bytes) -> bytes:
    """Inflate a complete zlib stream."""
    if len(data) < 2:
        raise CompressionError("Input is too small.")
    inflater = zlib.decompressobj()
    try:
        out = inflater.decompress(bytes(data))
    except zlib.error as exc:
        raise CompressionError(f"Zlib error: {exc}") from exc
    if not inflater.eof:
        raise CompressionError("Zlib stream ended before its end marker")
    return out


def decompress_zlib_with_length(data: bytes, buf_size: int, offset: int = 0) -> bytes:
    """Inflate into a buffer of exactly *buf_size* bytes.

    Output beyond *buf_size* is dropped; a shorter result is zero-padded.
    """
    if len(data) < 2:
        raise CompressionError("Input is too small")
    if buf_size <= 0:
        raise CompressionError("Cannot decompress into buffer with no size")
    source = bytes(data[offset:])
    if not source:
        raise CompressionError("No input at the given offset")
    try:
        out = zlib.decompressobj().decompress(source, buf_size)
    except zlib.error as exc:
        raise CompressionError(f"Zlib failed to decompress: {exc}") from exc
    return out + bytes(buf_size - len(out))


def decompress_chunk(data: bytes, out_size: int | None = None) -> bytes:
    """Decode chunk RLE.

    A byte other than 0xFF is copied. 0xFF is followed by a count; a count
    below 3 yields count + 1 bytes of 0xFF, otherwise the next byte is
    repeated count + 1 times. With *out_size* given, decoding stops once that
    many bytes are produced and the result is zero-padded to that length.
    """
    reader = BinaryIO(data)
    out = bytearray()
    try:
        while reader.position < len(data):
            if out_size is not None and len(out) >= out_size:
                break
            byte = reader.read_byte()
            if byte != 0xFF:
                out.append(byte)
                continue
            count = reader.read_byte()
            value = 0xFF if count < 3 else reader.read_byte()
            out.extend(bytes([value]) * (count + 1))
    except EOFError as exc:
        raise CompressionError("Chunk RLE data ends inside a run") from exc
    if out_size is not None:
        del out[out_size:]
        out.extend(bytes(out_size - len(out)))
    return bytes(out)


def decompress_vita(data: bytes, out_size: int = 0, offset: int = 0) -> bytes:
    """Decode Vita RLE, where a 0x00 byte is followed by a count of zeros.

    *out_size* is only a size hint; the output holds everything decoded.
    """
    reader = BinaryIO(data)
    reader.seek(offset)
    out = bytearray()
    try:
        while reader.position < len(data):
            byte = reader.read_byte()
            if byte == 0:
                out.extend(bytes(reader.read_byte()))
            else:
                out.append(byte)
    except EOFError as exc:
        raise CompressionError("Vita RLE data ends inside a run") from exc
    return bytes(out)


def decompress(data: bytes, compression_type: CompressionType) -> bytes:
    """Decompress *data* with the given scheme (zlib or Vita RLE)."""
    if compression_type == CompressionType.ZLIB:
        return decompress_zlib(data)
    if compression_type == CompressionType.VITA:
        return decompress_vita(data)
    raise ValueError("Invalid compression type")


def get_size_from_save(data: bytes, endian: ByteOrder) -> int:
    """Read the decompressed size stored at offset 4 of a compressed save."""
    reader = BinaryIO(data)
    reader.seek(4)
    return reader.read_uint32(endian)