# tests/unit/logging/test_unit_handlers.py — v1
"""Tests for logging/handlers.py — size parsing and rotating handler."""

from __future__ import annotations

import pytest

from voxrelay.logging.handlers import create_rotating_handler, parse_size


class TestParseSize:
    @pytest.mark.parametrize(
        "text,expected",
        [("100B", 100), ("512KB", 512 * 1024), ("10MB", 10 * 1024**2), ("1gb", 1024**3)],
    )
    def test_units(self, text, expected):
        assert parse_size(text) == expected

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid size format"):
            parse_size("ten megabytes")


class TestCreateRotatingHandler:
    def test_creates_parent_dir(self, tmp_path):
        target = tmp_path / "nested" / "run.log"
        handler = create_rotating_handler(target, rotation="2KB", retention=3)
        try:
            assert target.parent.is_dir()
            assert handler.maxBytes == 2048
            assert handler.backupCount == 3
        finally:
            handler.close()
