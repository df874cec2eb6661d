from __future__ import annotations

import logging

from ..storage.places import PlaceStore
from .autocomplete import AutocompleteAggregator
from .filters import apply_filters
from .models import AutocompleteSuggestion, Place, PlacePage, SearchCriteria
from .sorting import sort_places

logger = logging.getLogger(__name__)


class DiscoveryService:
    """Region-scoped listing, search, nearby and autocomplete over a :class:`PlaceStore`."""

    def __init__(self, store: PlaceStore) -> None:
        self.store = store
        self.fence = store.fence
        self.autocompleter = AutocompleteAggregator(store)

    def list_in_region(self) -> list[Place]:
        logger.info("Fetching all restaurants in %s", self.fence.name)
        return self.store.find_all_in_region()

    def list_in_region_paged(self, page: int, size: int) -> PlacePage:
        logger.info("Fetching %s restaurants page %d with size %d", self.fence.name, page, size)
        return self.store.find_all_in_region_paged(offset=page * size, size=size)

    def search(self, criteria: SearchCriteria) -> list[Place]:
        logger.info("Searching %s restaurants with filters: %s", self.fence.name,
                    criteria.model_dump(exclude_none=True))
        candidates = self.store.find_all_in_region()
        filtered = apply_filters(candidates, criteria)
        results = sort_places(filtered, criteria.sort_by, criteria.reference)
        logger.info("Found %d restaurants in %s matching criteria", len(results), self.fence.name)
        return results

    def nearby(self, lat: float, lng: float, radius_km: float) -> list[Place]:
        logger.info("Searching restaurants near (%s, %s) within %s km", lat, lng, radius_km)
        if not self.fence.contains(lat, lng):
            logger.warning(
                "Coordinates (%s, %s) are outside %s, returning all %s restaurants",
                lat, lng, self.fence.name, self.fence.name,
            )
            return self.list_in_region()
        return self.store.find_nearby_in_region(lat, lng, radius_km)

    def search_by_location(self, lat: float, lng: float, radius_km: float) -> list[Place]:
        return self.store.find_within_radius(lat, lng, radius_km)

    def search_by_neighborhood(self, neighborhood: str) -> list[Place]:
        logger.info("Searching restaurants in %s neighborhood: %s", self.fence.name, neighborhood)
        return self.store.find_by_neighborhood_in_region(neighborhood)

    def cuisines(self) -> list[str]:
        return self.store.find_distinct_cuisines_in_region()

    def neighborhoods(self) -> list[str]:
        return self.store.find_distinct_neighborhoods_in_region()

    def top_rated(self) -> list[Place]:
        return self.store.find_all_ordered_by_rating()

    def autocomplete(self, text: str | None, limit: int) -> list[AutocompleteSuggestion]:
        return self.autocompleter.suggest(text, limit)
