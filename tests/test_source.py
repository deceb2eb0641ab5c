"""Tests for input coercion and reading."""

import io

import numpy as np
import pytest

from entstats.source import as_byte_array, fold_case, read_input


class TestAsByteArray:
    def test_bytes(self):
        arr = as_byte_array(b"\x00\x7f\xff")
        assert arr.dtype == np.uint8
        assert list(arr) == [0, 127, 255]

    def test_int_sequence(self):
        assert list(as_byte_array([1, 2, 255])) == [1, 2, 255]

    def test_empty_list(self):
        arr = as_byte_array([])
        assert arr.dtype == np.uint8 and arr.size == 0

    def test_uint8_array_not_copied(self):
        src = np.arange(10, dtype=np.uint8)
        assert np.shares_memory(as_byte_array(src), src)

    @pytest.mark.parametrize("bad", [[256], [-1], np.array([0, 300])])
    def test_out_of_range(self, bad):
        with pytest.raises(ValueError):
            as_byte_array(bad)

    @pytest.mark.parametrize("bad", ["abc", [1.5, 2.0], np.zeros(4)])
    def test_not_integers(self, bad):
        with pytest.raises(TypeError):
            as_byte_array(bad)


class TestFoldCase:
    def test_folds_ascii_upper(self):
        assert fold_case(b"Hello, WORLD! @[").tobytes() == b"hello, world! @["

    def test_leaves_input_alone(self):
        raw = bytearray(b"ABC")
        fold_case(raw)
        assert raw == bytearray(b"ABC")


class TestReadInput:
    def test_file(self, tmp_path):
        path = tmp_path / "data.bin"
        path.write_bytes(b"\x01\x02\x03")
        assert read_input(path).tobytes() == b"\x01\x02\x03"

    def test_file_folded(self, tmp_path):
        path = tmp_path / "text.txt"
        path.write_bytes(b"AbC")
        assert read_input(str(path), fold=True).tobytes() == b"abc"

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            read_input(tmp_path / "nope.bin")

    def test_stdin(self, monkeypatch):
        fake = io.TextIOWrapper(io.BytesIO(b"xyz"))
        monkeypatch.setattr("sys.stdin", fake)
        assert read_input("-").tobytes() == b"xyz"
