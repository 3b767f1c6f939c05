"""Shared fixtures for termy tests."""

import pytest


@pytest.fixture
def write_config(tmp_path):
    """Write config text to a temporary config.txt and return its path."""

    def _write(text: str, name: str = "config.txt"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write
