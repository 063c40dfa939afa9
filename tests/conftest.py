"""
Shared fixtures for productcover tests.

Provides small, hand-checked catalogs and a helper that writes them to a
folder in the layout the loader expects (one .txt file per product).
"""

import logging
from pathlib import Path
from typing import Dict, List

import pytest

from productcover.core.catalog import Catalog
from productcover.utils.logging_setup import ROOT_LOGGER


SCENARIO_CATALOGS = {
    "A.txt": ["AAXX", "AAYY"],
    "B.txt": ["BBZZ"],
}

HARDWARE_CATALOGS = {
    "motors.txt": ["MT-9000-X", "MT-5520-Y", "MTR-77", "MT-9100-X"],
    "pumps.txt": ["PX-4410-AB", "PX-4410-AC", "PX-5520-AB", "PXL-9000"],
    "valves.txt": ["VL-4410-AB", "VL-2200-CD", "VLX-100", "VL-2200-CE"],
}


def write_catalogs(folder: Path, catalogs: Dict[str, List[str]]) -> Path:
    """Write each catalog as a text file, one part per line."""
    folder.mkdir(parents=True, exist_ok=True)
    for name, parts in catalogs.items():
        (folder / name).write_text("\n".join(parts) + "\n", encoding="utf-8")
    return folder


@pytest.fixture
def scenario_catalogs() -> List[Catalog]:
    """The two-catalog AAXX/AAYY vs BBZZ scenario."""
    return [Catalog(name, parts) for name, parts in SCENARIO_CATALOGS.items()]


@pytest.fixture
def hardware_catalogs() -> List[Catalog]:
    """Three overlapping hardware catalogs."""
    return [Catalog(name, parts) for name, parts in HARDWARE_CATALOGS.items()]


@pytest.fixture
def scenario_dir(tmp_path) -> Path:
    """Folder holding the scenario catalogs as .txt files."""
    return write_catalogs(tmp_path / "catalogs", SCENARIO_CATALOGS)


@pytest.fixture
def hardware_dir(tmp_path) -> Path:
    """Folder holding the hardware catalogs as .txt files."""
    return write_catalogs(tmp_path / "catalogs", HARDWARE_CATALOGS)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep environment overrides from leaking into tests."""
    for suffix in ("MIN_LEN", "MAX_LEN", "NON_OVERLAP", "WORKERS", "MAX_CANDIDATES"):
        monkeypatch.delenv(f"PRODUCTCOVER_{suffix}", raising=False)


@pytest.fixture
def catalog_writer():
    """Return the helper that writes catalogs into a folder."""
    return write_catalogs


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so records propagate to caplog again."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
