"""Shared fixtures for fin-tilt tests."""

import logging
from pathlib import Path

import pytest

from tilt_calculator import AllocationEntry, AllocationPolicy

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; put it back after every test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def plain_environment(monkeypatch):
    """Colour detection must not depend on the environment running the tests."""
    for name in ("FORCE_COLOR", "NO_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def voo_bnd_policy() -> AllocationPolicy:
    """80% S&P 500, 20% bonds; IVV and SPY count as VOO."""
    return AllocationPolicy([
        AllocationEntry(symbol="VOO", target_fraction=0.8, description="S&P 500",
                        aliases=("IVV", "SPY")),
        AllocationEntry(symbol="BND", target_fraction=0.2, description="Total bond market"),
    ])


@pytest.fixture
def thirds_policy() -> AllocationPolicy:
    return AllocationPolicy([
        AllocationEntry(symbol="A", target_fraction=0.3333),
        AllocationEntry(symbol="B", target_fraction=0.3333),
        AllocationEntry(symbol="C", target_fraction=0.3334),
    ])


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file under tmp_path and return its path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path
    return _write
