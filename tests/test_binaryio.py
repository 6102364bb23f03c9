import pytest
from hypothesis import given
from hypothesis import strategies as st

from lcekit.binaryio import BinaryIO, ByteOrder, trim_nulls

ORDERS = [ByteOrder.BIG, ByteOrder.LITTLE]

INT_KINDS = [
    ("uint16", 0, 2**16 - 1),
    ("int16", -(2**15), 2**15 - 1),
    ("uint32", 0, 2**32 - 1),
    ("int32", -(2**31), 2**31 - 1),
    ("uint64", 0, 2**64 - 1),
    ("int64", -(2**63), 2**63 - 1),
]


@pytest.mark.parametrize("kind,low,high", INT_KINDS)
@pytest.mark.parametrize("endian", ORDERS)
@given(data=st.data())
def test_integer_round_trip(kind, low, high, endian, data):
    value = data.draw(st.integers(min_value=low, max_value=high))
    io = BinaryIO()
    getattr(io, "write_" + kind)(value, endian)
    io.seek(0)
    assert getattr(io, "read_" + kind)(endian) == value


@given(st.integers(min_value=0, max_value=2**32 - 1))
def test_big_and_little_are_reversed(value):
    big = BinaryIO()
    big.write_uint32(value, ByteOrder.BIG)
    little = BinaryIO()
    little.write_uint32(value, ByteOrder.LITTLE)
    assert big.getvalue() == little.getvalue()[::-1]


def test_big_endian_wire_bytes():
    io = BinaryIO()
    io.write_uint16(0x1234, ByteOrder.BIG)
    assert io.getvalue() == b"\x12\x34"


def test_bytes_round_trip_and_signed_byte():
    io = BinaryIO()
    io.write_byte(200)
    io.write_signed_byte(-1)
    io.seek(0)
    assert io.read_byte() == 200
    assert io.read_signed_byte() == -1


@pytest.mark.parametrize("endian", ORDERS)
@given(raw=st.binary(min_size=3, max_size=3))
def test_int24_sign_extension(endian, raw):
    io = BinaryIO(raw)
    unsigned = io.read_uint24(endian)
    io.seek(0)
    signed = io.read_int24(endian)
    assert 0 <= unsigned < (1 << 24)
    if unsigned & (1 << 23):
        assert signed == unsigned - (1 << 24)
    else:
        assert signed == unsigned


def test_uint24_orders_are_mirrored():
    raw = b"\x01\x02\x03"
    assert BinaryIO(raw).read_uint24(ByteOrder.BIG) == BinaryIO(raw[::-1]).read_uint24(ByteOrder.LITTLE)


def test_unsigned_write_truncates_to_width():
    io = BinaryIO()
    io.write_uint16(-1, ByteOrder.LITTLE)
    io.seek(0)
    assert io.read_uint16(ByteOrder.LITTLE) == 0xFFFF


def test_seek_and_relative_seek():
    io = BinaryIO(b"abcdef")
    io.seek(2)
    assert io.read_bytes(1) == b"c"
    io.seek_relative(1)
    assert io.position == 4
    assert io.read_bytes(2) == b"ef"


def test_negative_seek_rejected():
    io = BinaryIO(b"ab")
    with pytest.raises(ValueError):
        io.seek(-1)


def test_read_past_end_raises():
    io = BinaryIO(b"\x01\x02")
    with pytest.raises(EOFError):
        io.read_uint32(ByteOrder.BIG)


def test_write_past_end_pads_with_zeros():
    io = BinaryIO()
    io.seek(4)
    io.write_byte(1)
    assert io.getvalue() == bytes(4) + b"\x01"


def test_sized_buffer_is_zero_filled_and_overwritten():
    io = BinaryIO(4)
    io.write_bytes(b"ab")
    assert io.getvalue() == b"ab" + bytes(2)


@given(st.text())
def test_utf8_round_trip(text):
    io = BinaryIO()
    io.write_utf8(text)
    size = io.position
    io.seek(0)
    assert io.read_utf8(size) == text


def test_utf8_null_terminated():
    io = BinaryIO()
    io.write_utf8("abc")
    io.write_byte(0)
    io.write_utf8("z")
    io.seek(0)
    assert io.read_utf8_null_terminated() == "abc"
    assert io.position == len("abc") + 1


def test_utf8_null_terminated_without_terminator():
    io = BinaryIO(b"abc")
    with pytest.raises(EOFError):
        io.read_utf8_null_terminated()


@pytest.mark.parametrize("endian", ORDERS)
@given(text=st.text(alphabet=st.characters(blacklist_characters="\x00")))
def test_wchar2_round_trip(endian, text):
    io = BinaryIO()
    io.write_wchar2(text, endian, True)
    end = io.position
    io.seek(0)
    assert io.read_wchar2_nt(endian) == text
    assert io.position == end


def test_wchar2_big_endian_wire_bytes():
    io = BinaryIO()
    io.write_wchar2("A", ByteOrder.BIG)
    assert io.getvalue() == b"\x00A"


def test_wchar2_fixed_size_keeps_padding():
    io = BinaryIO()
    io.write_wchar2("ab\x00\x00", ByteOrder.LITTLE)
    io.seek(0)
    assert io.read_wchar2(4, ByteOrder.LITTLE) == "ab\x00\x00"


@pytest.mark.parametrize("endian", ORDERS)
@given(text=st.text(alphabet=st.characters(blacklist_characters="\x00", blacklist_categories=("Cs",))))
def test_wchar4_round_trip(endian, text):
    io = BinaryIO()
    io.write_wchar4(text, endian, True)
    end = io.position
    io.seek(0)
    assert io.read_wchar4_nt(endian) == text
    assert io.position == end
    io.seek(0)
    assert io.read_wchar4(len(text), endian) == text


def test_wchar_nt_without_terminator():
    io = BinaryIO(b"a\x00b\x00")
    with pytest.raises(EOFError):
        io.read_wchar2_nt(ByteOrder.LITTLE)


def test_trim_nulls():
    assert trim_nulls("ab\x00\x00") == "ab"
    assert trim_nulls("a\x00b") == "a\x00b"