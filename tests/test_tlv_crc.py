import pytest

from pixqr.crc import crc16_ccitt, crc16_ccitt_value, format_crc
from pixqr.services.errors import OversizeFieldDefect
from pixqr.tlv import TLVItem, build_tlv


class TestTlv:
    def test_short_value_is_zero_padded(self):
        assert TLVItem(tag="00", value="01").serialize() == "000201"

    def test_longer_value(self):
        assert TLVItem(tag="00", value="BR.GOV.BCB.PIX").serialize() == "0014BR.GOV.BCB.PIX"

    def test_empty_value(self):
        assert TLVItem(tag="05", value="").serialize() == "0500"

    def test_build_concatenates_without_separator(self):
        items = [TLVItem(tag="52", value="0000"), TLVItem(tag="53", value="986")]
        assert build_tlv(items) == "520400005303986"

    def test_nested_record_uses_inner_length(self):
        inner = build_tlv([TLVItem(tag="05", value="TX1")])
        assert TLVItem(tag="62", value=inner).serialize() == "62070503TX1"

    def test_length_counts_characters(self):
        assert TLVItem(tag="59", value="João").serialize() == "5904João"

    def test_ninety_nine_characters_fit(self):
        serialized = TLVItem(tag="59", value="a" * 99).serialize()
        assert serialized.startswith("5999")

    def test_oversize_value_raises(self):
        with pytest.raises(OversizeFieldDefect) as exc_info:
            TLVItem(tag="59", value="a" * 100).serialize()
        assert exc_info.value.code == "ERR_FIELD_OVERSIZE"
        assert exc_info.value.field == "59"


class TestCrc16:
    def test_standard_check_value(self):
        assert crc16_ccitt("123456789") == "29B1"

    def test_empty_input_is_initial_value(self):
        assert crc16_ccitt("") == "FFFF"

    def test_value_is_sixteen_bits(self):
        assert 0 <= crc16_ccitt_value(b"any payload 6304") <= 0xFFFF

    def test_small_values_are_zero_padded(self):
        assert format_crc(0) == "0000"
        assert format_crc(0xA1) == "00A1"
        assert format_crc(0xBEEF) == "BEEF"

    def test_hashes_utf8_bytes(self):
        assert crc16_ccitt("São") == format_crc(crc16_ccitt_value("São".encode("utf-8")))
