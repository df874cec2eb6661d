from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "processed" / "restaurants.csv"


@dataclass(frozen=True)
class StoreConfig:
    data_path: Path = Path(os.getenv("FOODCRITIC_DATA_PATH", str(_DEFAULT_DATA_PATH)))


DEFAULT_STORE_CONFIG = StoreConfig()
