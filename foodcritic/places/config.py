from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class PlacesConfig:
    api_key: str = os.getenv("GOOGLE_PLACES_API_KEY", "")
    base_url: str = os.getenv("GOOGLE_PLACES_BASE_URL", "https://maps.googleapis.com/maps/api/place")
    timeout: float = float(os.getenv("GOOGLE_PLACES_TIMEOUT", "10"))
    enabled: bool = True

    @property
    def active(self) -> bool:
        return self.enabled and bool(self.api_key)


DEFAULT_PLACES_CONFIG = PlacesConfig()
