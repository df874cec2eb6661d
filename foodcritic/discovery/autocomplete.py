from __future__ import annotations

import logging

from ..classify.neighborhoods import REGION_NAME, classify_neighborhood
from ..storage.places import PlaceStore
from .models import (
    AutocompleteSuggestion,
    CuisineSuggestion,
    NeighborhoodSuggestion,
    RestaurantSuggestion,
)

logger = logging.getLogger(__name__)


def _slug(label: str) -> str:
    return label.lower().replace(" ", "-")


def quotas(limit: int) -> tuple[int, int, int]:
    """Split ``limit`` into (restaurant, cuisine, neighborhood) sub-limits."""
    return max(1, limit // 2), max(1, limit // 4), max(1, limit // 4)


class AutocompleteAggregator:
    """Suggestions over restaurant names, cuisines and neighborhoods in the region.

    Each pool is truncated to its quota before merging; unused quota is not
    handed to the other pools. Restaurant suggestions come first.
    """

    def __init__(self, store: PlaceStore) -> None:
        self.store = store

    def suggest(self, text: str | None, limit: int) -> list[AutocompleteSuggestion]:
        term = (text or "").strip().lower()
        if not term or limit <= 0:
            return []

        restaurant_quota, cuisine_quota, neighborhood_quota = quotas(limit)

        restaurants = [
            RestaurantSuggestion(
                id=place.id,
                title=place.name,
                subtitle=f"{place.cuisine} • {classify_neighborhood(place.address, REGION_NAME)}",
                restaurant=place,
            )
            for place in self.store.find_all_in_region()
            if place.name and term in place.name.lower()
        ][:restaurant_quota]

        cuisines = [
            CuisineSuggestion(id=f"cuisine-{_slug(cuisine)}", title=cuisine, subtitle="Cuisine type")
            for cuisine in self.store.find_distinct_cuisines_in_region()
            if term in cuisine.lower()
        ][:cuisine_quota]

        neighborhoods = [
            NeighborhoodSuggestion(
                id=f"neighborhood-{_slug(neighborhood)}",
                title=neighborhood,
                subtitle=f"{REGION_NAME} area",
            )
            for neighborhood in self.store.find_distinct_neighborhoods_in_region()
            if term in neighborhood.lower()
        ][:neighborhood_quota]

        merged: dict[tuple[str, str, str, str], AutocompleteSuggestion] = {}
        for suggestion in [*restaurants, *cuisines, *neighborhoods]:
            merged.setdefault(suggestion.identity(), suggestion)

        logger.info("Generated %d autocomplete suggestions for input: %s", len(merged), text)
        return list(merged.values())[:limit]
