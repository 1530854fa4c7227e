from __future__ import annotations

import os
from pathlib import Path

DATA_DIR_ENV = "INVOICE_ENGINE_DATA_DIR"
PACKAGE_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV)
    return Path(override) if override else PACKAGE_DATA_DIR


def data_path(name: str) -> Path:
    return data_dir() / name
