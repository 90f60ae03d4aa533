"""
Security Tests - Adversarial input, limits, and immutability.
"""

import pytest

from inipack.config import IniConfig
from inipack.cursor import Cursor, Record
from inipack.errors import IniSyntaxError, InvalidKey, MissingValue
from inipack.packer import IniPacker


class TestAdversarialInput:

    def test_control_bytes_are_whitespace(self):
        config = IniConfig("\x01\x02key\x03=\x04value\x05\n")
        assert list(config) == [Record(None, "key", "value")]

    def test_tag_bytes_inside_value_do_not_confuse_cursor(self):
        config = IniConfig("a=x\x01y\x02z\nb=2\n")
        assert config.get("a") == "x\x01y\x02z"
        assert config.get("b") == "2"
        assert config.size() == 2

    def test_tag_bytes_inside_section_name(self):
        config = IniConfig("[s\x01\x02]\nk=v\n")
        assert list(config) == [Record("s\x01\x02", "k", "v")]

    def test_nul_cannot_smuggle_a_pair_into_a_value(self):
        # NUL ends the line, so "b=2" is a separate pair, not part of a's value
        config = IniConfig("a=1\x00b=2\n")
        assert config.get("a") == "1"
        assert config.get("b") == "2"

    def test_nul_inside_key_line_splits_it(self):
        with pytest.raises(InvalidKey):
            IniConfig("ke\x00y=1\n")

    def test_delete_char_is_whitespace(self):
        with pytest.raises(InvalidKey):
            IniConfig("ke\x7fy=1\n")

    def test_invalid_utf8_is_replaced_on_decode(self):
        config = IniConfig(b"k=\xff\xfe\n")
        assert config.get("k") == "\ufffd\ufffd"

    def test_bare_carriage_returns(self):
        with pytest.raises(MissingValue):
            IniConfig("k=\r\r\r\n")

    def test_no_partial_config_on_late_error(self):
        source = "\n".join(f"k{i}=v" for i in range(1000)) + "\nbroken line\n"
        with pytest.raises(IniSyntaxError) as exc:
            IniConfig(source)
        assert exc.value.line_number == 1001

    def test_error_line_is_decoded_safely(self):
        with pytest.raises(InvalidKey) as exc:
            IniConfig(b"bad \xff key=1\r\n")
        assert exc.value.line == "bad \ufffd key=1"


class TestLimits:

    def test_size_limit_counts_encoded_bytes(self):
        text = "k=" + "é" * 10  # 22 bytes once encoded
        with pytest.raises(ValueError, match="exceeds maximum"):
            IniConfig(text, max_size=21)
        assert IniConfig(text, max_size=22).get("k") == "é" * 10

    def test_cursor_offsets_stay_in_bounds(self):
        config = IniConfig("[a]\nx=1\n[b]\n")
        it = config.begin()
        for _ in range(5):
            it.advance()
            assert 0 <= it.offset < len(config.buffer)


class TestImmutability:

    def test_buffer_is_bytes(self):
        config = IniConfig("a=1")
        assert isinstance(config.buffer, bytes)

    def test_buffer_property_is_read_only(self):
        config = IniConfig("a=1")
        with pytest.raises(AttributeError):
            config.buffer = b"\x00"

    def test_cursors_share_buffer_without_mutation(self):
        config = IniConfig("[a]\nx=1\ny=2\n")
        before = config.buffer
        a = config.begin()
        b = config.begin()
        a.advance()
        assert b.record == Record("a", "x", "1")
        assert config.buffer == before

    def test_pack_output_is_immutable(self):
        buffer, _ = IniPacker.build("a=1")
        with pytest.raises(TypeError):
            buffer[0] = 0
