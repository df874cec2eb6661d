from dataclasses import dataclass
from pathlib import Path

from ..storage.config import DEFAULT_STORE_CONFIG


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for the seed ingestion job.
    """

    query: str = "restaurants in San Diego"
    latitude: float = 32.7157
    longitude: float = -117.1611
    radius: int = 50000
    max_pages: int = 3
    # Google only honours a next_page_token after a short delay
    page_delay_seconds: float = 2.5
    output_path: Path = DEFAULT_STORE_CONFIG.data_path


DEFAULT_INGESTION_CONFIG = IngestionConfig()
