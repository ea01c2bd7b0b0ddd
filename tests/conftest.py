"""Shared fixtures for gd_codec tests."""

from pathlib import Path

import pytest

from gd_codec.codec.framing import compress


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """Path to a throwaway INI settings file."""
    return tmp_path / "settings.ini"


@pytest.fixture
def app_settings(settings_file: Path):
    """AppSettings backed by a temporary INI file."""
    from gd_codec.settings import AppSettings

    return AppSettings(settings_file=settings_file)


@pytest.fixture
def level_text() -> str:
    """Decompressed level text: header plus three objects, one malformed."""
    return (
        "kS38,1_40_2_125,kA13,0;"
        "1,1,2,15,3,15;"
        "1,8,2,45,3,15,19,3;"
        "1,0,2,75,3,15;"
    )


@pytest.fixture
def level_blob(level_text: str) -> str:
    return compress(level_text)
