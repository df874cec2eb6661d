from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator

from ..classify.cuisines import DEFAULT_CUISINE, classify_cuisine
from ..discovery.models import Place
from ..storage.places import PlaceStore
from . import client
from .config import DEFAULT_PLACES_CONFIG, PlacesConfig
from .models import ProviderPlaceDetails

logger = logging.getLogger(__name__)

STUB_NAME = "Restaurant"

DetailsFetcher = Callable[[str, PlacesConfig], ProviderPlaceDetails | None]


def details_to_place(place_id: str, details: ProviderPlaceDetails) -> Place:
    """Map a Google details result onto a local restaurant keyed by ``place_id``."""
    lat = lng = None
    if details.geometry is not None and details.geometry.location is not None:
        lat = details.geometry.location.lat
        lng = details.geometry.location.lng
    if lat is None or lng is None:
        lat = lng = None

    price_level = details.price_level
    if price_level is not None and not 0 <= price_level <= 4:
        price_level = None

    return Place(
        id=place_id,
        name=details.name,
        cuisine=classify_cuisine(details.types),
        address=details.formatted_address,
        phone_number=details.formatted_phone_number,
        website=details.website,
        latitude=lat,
        longitude=lng,
        price_level=price_level,
        open_now=details.opening_hours.open_now if details.opening_hours else None,
        user_ratings_total=details.user_ratings_total,
    )


def stub_place(place_id: str) -> Place:
    return Place(id=place_id, name=STUB_NAME, cuisine=DEFAULT_CUISINE)


class _KeyedLock:
    """One mutex per key, dropped once nobody holds or waits on it."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, tuple[threading.Lock, int]] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            lock, users = self._locks.get(key, (None, 0))
            if lock is None:
                lock = threading.Lock()
            self._locks[key] = (lock, users + 1)
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                _, users = self._locks[key]
                if users <= 1:
                    del self._locks[key]
                else:
                    self._locks[key] = (lock, users - 1)


class PlaceResolver:
    """Return the local restaurant for a Google place id, creating it on first reference."""

    def __init__(
        self,
        store: PlaceStore,
        config: PlacesConfig = DEFAULT_PLACES_CONFIG,
        fetch_details: DetailsFetcher | None = None,
    ) -> None:
        self.store = store
        self.config = config
        self._fetch_details = fetch_details or client.place_details
        self._locks = _KeyedLock()

    def resolve_or_create(self, place_id: str) -> Place:
        existing = self.store.find_by_id(place_id)
        if existing is not None:
            return existing

        with self._locks.hold(place_id):
            # Another caller may have created it while we waited
            existing = self.store.find_by_id(place_id)
            if existing is not None:
                return existing

            place = self._build(place_id)
            stored, created = self.store.insert_if_absent(place)
            if created:
                logger.info("Created restaurant %s (%s)", place_id, stored.name)
            return stored

    def _build(self, place_id: str) -> Place:
        if not self.config.active:
            logger.info("Google Places disabled; creating stub restaurant for %s", place_id)
            return stub_place(place_id)

        try:
            details = self._fetch_details(place_id, self.config)
            if details is not None and details.name:
                return details_to_place(place_id, details)
            logger.warning("Google Places returned no usable details for %s", place_id)
        except Exception:
            logger.warning(
                "Failed to fetch Google Places details for %s, using stub", place_id, exc_info=True
            )
        return stub_place(place_id)
