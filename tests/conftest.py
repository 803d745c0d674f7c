from __future__ import annotations

from pathlib import Path

import pytest


def data_path() -> Path:
    """
    :return: Directory holding the HTML fixtures
    """
    return Path(__file__).parent / "fixtures"


def read_text(path: Path) -> str:
    """
    :param path: Fixture path
    :return: Fixture contents decoded as UTF-8, untouched otherwise
    """
    return path.read_text(encoding="utf-8")


@pytest.fixture
def fixture_bytes():
    """
    :return: Loader returning the raw bytes of a named fixture
    """
    return lambda name: (data_path() / name).read_bytes()
