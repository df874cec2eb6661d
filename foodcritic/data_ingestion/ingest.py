from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

import requests

from ..geo.fence import SAN_DIEGO, GeoFence
from ..places import client
from ..places.config import DEFAULT_PLACES_CONFIG, PlacesConfig
from ..places.models import ProviderSearchRequest
from ..places.resolver import details_to_place
from ..storage.places import PlaceStore
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)


def run_ingestion(
    config: IngestionConfig = DEFAULT_INGESTION_CONFIG,
    places_config: PlacesConfig = DEFAULT_PLACES_CONFIG,
    fence: GeoFence = SAN_DIEGO,
    sleep=time.sleep,
) -> Path:
    """
    Execute the seed ingestion.

    Steps:
    - Text-search Google Places page by page, passing next_page_token through.
    - Fetch details for every result and map it onto a Place.
    - Drop results outside the region and write the rest as CSV.
    """
    if not places_config.active:
        raise RuntimeError("GOOGLE_PLACES_API_KEY is required for ingestion")

    store = PlaceStore(fence=fence)
    request = ProviderSearchRequest(
        query=config.query,
        latitude=config.latitude,
        longitude=config.longitude,
        radius=config.radius,
    )

    pages = 0
    while pages < config.max_pages:
        try:
            payload = client.text_search(request, places_config)
        except (client.GooglePlacesError, requests.RequestException) as exc:
            # Keep whatever earlier pages produced
            logger.error("Text search failed on page %d: %s", pages + 1, exc)
            break
        results = payload.get("results", [])
        logger.info("Fetched %d results on page %d", len(results), pages + 1)

        for result in results:
            place_id = result.get("place_id")
            if not place_id:
                logger.debug("Skipping result without place_id: %s", result)
                continue
            try:
                details = client.place_details(place_id, places_config)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Failed to fetch details for %s: %s", place_id, exc)
                continue
            if details is None or not details.name:
                continue

            place = details_to_place(place_id, details)
            if not fence.contains(place.latitude, place.longitude):
                logger.debug("Skipping %s outside %s", place_id, fence.name)
                continue
            store.save(place)

        pages += 1
        token = payload.get("next_page_token")
        if not token:
            break
        request = ProviderSearchRequest(page_token=token)
        sleep(config.page_delay_seconds)

    output_path = store.to_csv(config.output_path)
    logger.info("Ingested %d restaurants over %d pages into %s", len(store), pages, output_path)
    return output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed the local restaurant store from Google Places")
    parser.add_argument("--query", default=DEFAULT_INGESTION_CONFIG.query, help="Text search query")
    parser.add_argument("--max-pages", type=int, default=DEFAULT_INGESTION_CONFIG.max_pages)
    parser.add_argument("--output", type=Path, default=DEFAULT_INGESTION_CONFIG.output_path)
    return parser


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args()
    config = IngestionConfig(query=args.query, max_pages=args.max_pages, output_path=args.output)
    path = run_ingestion(config)
    print(f"Ingestion complete. Processed data saved to: {path}")


if __name__ == "__main__":
    main()
