"""Test module for configuration loading."""

import pytest

from jigsaw_core.config import Settings, get_settings, settings


def test_defaults() -> None:
    """Test the documented default values."""
    config = Settings()
    assert config.DEFAULT_PIECE_COUNT == 40
    assert config.WAVES_PER_CUT == 3
    assert config.EDGE_SAMPLES == 20
    assert config.SCATTER_FACTOR == 2.0
    assert config.SNAP_THRESHOLD_RATIO == pytest.approx(1 / 3)
    assert (config.MIN_ZOOM, config.MAX_ZOOM) == (0.1, 10.0)


def test_environment_override(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that JIGSAW_-prefixed environment variables override defaults."""
    monkeypatch.setenv("JIGSAW_DEFAULT_PIECE_COUNT", "12")
    monkeypatch.setenv("JIGSAW_MAX_ZOOM", "4.5")

    config = Settings()

    assert config.DEFAULT_PIECE_COUNT == 12
    assert config.MAX_ZOOM == 4.5


def test_unprefixed_variables_are_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that variables without the prefix do not leak into settings."""
    monkeypatch.setenv("DEFAULT_PIECE_COUNT", "7")
    assert Settings().DEFAULT_PIECE_COUNT == 40


def test_settings_are_cached() -> None:
    """Test that get_settings returns the module-level instance."""
    assert get_settings() is get_settings()
    assert settings is get_settings()
