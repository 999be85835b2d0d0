"""Tests for environment-driven settings."""

import logging

import pytest

from app.config import LOG_LEVEL, PER_PAGE, resolve_log_level


class TestLogLevel:
    @pytest.mark.parametrize(
        "raw, expected",
        [("debug", "DEBUG"), (" Warning ", "WARNING"), ("ERROR", "ERROR")],
    )
    def test_known_levels(self, raw, expected) -> None:
        assert resolve_log_level(raw) == expected

    @pytest.mark.parametrize("raw", ["verbose", "", "10x"])
    def test_unknown_level_falls_back_to_info(self, raw) -> None:
        assert resolve_log_level(raw) == "INFO"

    def test_module_level_is_usable_by_logging(self) -> None:
        assert isinstance(logging.getLevelName(LOG_LEVEL), int)


def test_page_size_is_fixed() -> None:
    assert PER_PAGE == 25
