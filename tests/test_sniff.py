"""Tests for the text/binary file heuristic."""

from pathlib import Path

from btw.core.sniff import SAMPLE_SIZE, looks_like_text


class TestLooksLikeText:
    def test_plain_ascii(self, tmp_path: Path):
        path = tmp_path / "notes.txt"
        path.write_text("hello\nworld\n\ttabbed\r\n")
        assert looks_like_text(path) is True

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty"
        path.write_bytes(b"")
        assert looks_like_text(path) is True

    def test_null_byte(self, tmp_path: Path):
        path = tmp_path / "data.bin"
        path.write_bytes(b"abc" * 100 + b"\x00" + b"def")
        assert looks_like_text(path) is False

    def test_null_byte_after_sample_is_not_seen(self, tmp_path: Path):
        path = tmp_path / "long.txt"
        path.write_bytes(b"a" * SAMPLE_SIZE + b"\x00")
        assert looks_like_text(path) is True

    def test_many_control_characters(self, tmp_path: Path):
        path = tmp_path / "ctrl"
        path.write_bytes(b"\x01\x02\x03\x1b" * 10 + b"a" * 40)
        assert looks_like_text(path) is False

    def test_few_control_characters(self, tmp_path: Path):
        path = tmp_path / "ansi.log"
        path.write_bytes(b"\x1b[0m" + b"a" * 100)
        assert looks_like_text(path) is True

    def test_utf8_heavy_text(self, tmp_path: Path):
        path = tmp_path / "greek.txt"
        path.write_text("αβγδε" * 200, encoding="utf-8")
        assert looks_like_text(path) is True

    def test_utf8_character_cut_at_sample_boundary(self, tmp_path: Path):
        path = tmp_path / "cut.txt"
        path.write_text("a" + "é" * SAMPLE_SIZE, encoding="utf-8")
        assert looks_like_text(path) is True

    def test_invalid_utf8_high_bytes(self, tmp_path: Path):
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"\xe9\xe8\xff" * 100)
        assert looks_like_text(path) is False

    def test_unreadable_is_indeterminate(self, tmp_path: Path):
        assert looks_like_text(tmp_path / "missing.txt") is None
        assert looks_like_text(tmp_path) is None
