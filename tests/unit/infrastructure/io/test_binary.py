"""Unit tests for fixed-offset field extraction."""

from xport_reader.infrastructure.io.binary import (
    is_blank,
    read_int32,
    read_raw_text,
    read_text,
    read_uint16,
    read_uint64,
    trim_field,
)


class TestIntegers:
    def test_uint16_is_big_endian(self):
        assert read_uint16(b"\x00\x01\x02\x03", 0) == 0x0001
        assert read_uint16(b"\x00\x01\x02\x03", 2) == 0x0203

    def test_int32_is_big_endian_and_signed(self):
        assert read_int32(b"\x00\x00\x01\x00", 0) == 256
        assert read_int32(b"\xff\xff\xff\xff", 0) == -1

    def test_uint64_full_width(self):
        buf = b"\x00\x41\x10\x00\x00\x00\x00\x00\x00"
        assert read_uint64(buf, 1) == 0x4110000000000000

    def test_uint64_short_field_is_zero_extended_on_the_right(self):
        """A 3-byte numeric keeps the high-order bytes of the 8-byte value."""
        assert read_uint64(b"\x41\x28\x00", 0, length=3) == 0x4128000000000000

    def test_reads_from_memoryview(self):
        view = memoryview(bytearray(b"\x12\x34"))
        assert read_uint16(view, 0) == 0x1234


class TestText:
    def test_trailing_spaces_are_trimmed(self):
        assert read_text(b"ABC     ", 0, 8) == "ABC"

    def test_all_blank_field_is_empty(self):
        assert read_text(b"        ", 0, 8) == ""

    def test_leading_whitespace_is_trimmed(self):
        assert read_text(b"  AB CD ", 0, 8) == "AB CD"

    def test_trailing_nuls_are_trimmed(self):
        assert read_text(b"AB\x00\x00\x00", 0, 5) == "AB"

    def test_field_width_is_respected(self):
        """Bytes after the declared width never leak into the value."""
        assert read_text(b"ABCDEFGH", 2, 3) == "CDE"

    def test_encoding_applies_to_high_bytes(self):
        assert read_text("Müller ".encode("latin-1"), 0, 7) == "Müller"

    def test_raw_text_keeps_padding(self):
        assert read_raw_text(b"OBS     HEADER", 0, 8) == "OBS     "

    def test_trim_field(self):
        assert trim_field(b" x \x00") == b"x"


class TestIsBlank:
    def test_spaces_are_blank(self):
        assert is_blank(b"    ")

    def test_empty_is_blank(self):
        assert is_blank(b"")

    def test_nul_is_not_blank(self):
        assert not is_blank(b"  \x00 ")
