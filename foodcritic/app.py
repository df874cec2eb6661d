from __future__ import annotations

import logging
import os
import threading
from typing import Any

import requests
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import RedirectResponse

from .discovery.filters import filter_provider_results
from .discovery.models import (
    AutocompleteResponse,
    Place,
    PlacePage,
    Rating,
    RatingRequest,
    SearchCriteria,
    SortKey,
)
from .discovery.service import DiscoveryService
from .places import client as places_client
from .places.config import DEFAULT_PLACES_CONFIG, PlacesConfig
from .places.models import ProviderPlaceDetails, ProviderSearchRequest, ProviderSuggestionsRequest
from .places.resolver import PlaceResolver
from .storage.places import PlaceStore, get_place_store

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="FoodCritic Restaurant Discovery API", version="1.0.0")

_resolver: PlaceResolver | None = None
_resolver_lock = threading.Lock()


# ── Dependencies ─────────────────────────────────────────────────────────


def get_store() -> PlaceStore:
    return get_place_store()


def get_places_config() -> PlacesConfig:
    return DEFAULT_PLACES_CONFIG


def get_discovery(store: PlaceStore = Depends(get_store)) -> DiscoveryService:
    return DiscoveryService(store)


def get_resolver(
    store: PlaceStore = Depends(get_store),
    config: PlacesConfig = Depends(get_places_config),
) -> PlaceResolver:
    # The resolver's per-id locks only help if every request shares one instance
    global _resolver
    with _resolver_lock:
        if _resolver is None or _resolver.store is not store or _resolver.config != config:
            _resolver = PlaceResolver(store, config)
        return _resolver


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/restaurants", response_model=list[Place])
def list_restaurants(service: DiscoveryService = Depends(get_discovery)) -> list[Place]:
    return service.list_in_region()


@app.get("/restaurants/page", response_model=PlacePage)
def list_restaurants_paged(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=20, ge=1, le=100),
    service: DiscoveryService = Depends(get_discovery),
) -> PlacePage:
    return service.list_in_region_paged(page, size)


@app.get("/restaurants/search", response_model=list[Place])
def search_restaurants(
    name: str | None = None,
    cuisine: str | None = None,
    price_level: int | None = Query(default=None, ge=0, le=4),
    open_now: bool | None = None,
    min_rating: float | None = Query(default=None, ge=0.0, le=5.0),
    sort_by: SortKey | None = None,
    latitude: float | None = None,
    longitude: float | None = None,
    service: DiscoveryService = Depends(get_discovery),
) -> list[Place]:
    criteria = SearchCriteria(
        name=name,
        cuisine=cuisine,
        price_level=price_level,
        open_now=open_now,
        min_rating=min_rating,
        sort_by=sort_by,
        latitude=latitude,
        longitude=longitude,
    )
    return service.search(criteria)


@app.get("/restaurants/nearby", response_model=list[Place])
def nearby_restaurants(
    latitude: float,
    longitude: float,
    radius_km: float = Query(default=5.0, gt=0.0, le=100.0),
    service: DiscoveryService = Depends(get_discovery),
) -> list[Place]:
    return service.nearby(latitude, longitude, radius_km)


@app.get("/restaurants/location", response_model=list[Place])
def restaurants_by_location(
    latitude: float,
    longitude: float,
    radius_km: float = Query(default=5.0, gt=0.0, le=100.0),
    service: DiscoveryService = Depends(get_discovery),
) -> list[Place]:
    return service.search_by_location(latitude, longitude, radius_km)


@app.get("/restaurants/neighborhood/{neighborhood}", response_model=list[Place])
def restaurants_by_neighborhood(
    neighborhood: str,
    service: DiscoveryService = Depends(get_discovery),
) -> list[Place]:
    return service.search_by_neighborhood(neighborhood)


@app.get("/restaurants/cuisines")
def cuisines(service: DiscoveryService = Depends(get_discovery)) -> list[str]:
    return service.cuisines()


@app.get("/restaurants/neighborhoods")
def neighborhoods(service: DiscoveryService = Depends(get_discovery)) -> list[str]:
    return service.neighborhoods()


@app.get("/restaurants/top-rated", response_model=list[Place])
def top_rated(service: DiscoveryService = Depends(get_discovery)) -> list[Place]:
    return service.top_rated()


@app.get("/restaurants/autocomplete", response_model=AutocompleteResponse)
def autocomplete(
    input: str = Query(default=""),
    limit: int = Query(default=10, ge=0, le=50),
    service: DiscoveryService = Depends(get_discovery),
) -> AutocompleteResponse:
    return AutocompleteResponse(suggestions=service.autocomplete(input, limit))


@app.get("/restaurants/{place_id}", response_model=Place)
def get_restaurant(place_id: str, store: PlaceStore = Depends(get_store)) -> Place:
    place = store.find_by_id(place_id)
    if place is None:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    return place


@app.post("/restaurants/google/{place_id}", response_model=Place)
def resolve_restaurant(place_id: str, resolver: PlaceResolver = Depends(get_resolver)) -> Place:
    return resolver.resolve_or_create(place_id)


# ── Reviews ──────────────────────────────────────────────────────────────


@app.get("/restaurants/{place_id}/reviews", response_model=list[Rating])
def list_reviews(place_id: str, store: PlaceStore = Depends(get_store)) -> list[Rating]:
    return store.ratings.find_by_place(place_id)


@app.post("/restaurants/{place_id}/reviews", response_model=Rating)
def submit_review(
    place_id: str,
    body: RatingRequest,
    resolver: PlaceResolver = Depends(get_resolver),
) -> Rating:
    # Reviews may reference a Google place never seen locally
    place = resolver.resolve_or_create(place_id)
    return resolver.store.ratings.upsert(place.id, body.reviewer, body.score, body.comment)


@app.get("/reviews/recent", response_model=list[Rating])
def recent_reviews(
    limit: int = Query(default=10, ge=1, le=100),
    store: PlaceStore = Depends(get_store),
) -> list[Rating]:
    return store.ratings.find_recent(limit)


# ── Google Places passthrough ───────────────────────────────────────────


@app.post("/google-places/search")
def google_places_search(
    body: ProviderSearchRequest,
    config: PlacesConfig = Depends(get_places_config),
) -> dict[str, Any]:
    logger.info(
        "Searching restaurants with request: lat=%s, lng=%s, query=%s, radius=%s",
        body.latitude, body.longitude, body.query, body.radius,
    )
    try:
        payload = places_client.text_search(body, config)
    except (places_client.GooglePlacesError, requests.RequestException) as exc:
        logger.error("Google Places search failed: %s", exc)
        raise HTTPException(status_code=502, detail="Google Places search failed") from exc

    payload["results"] = filter_provider_results(
        payload.get("results"),
        min_rating=body.min_rating,
        min_price_level=body.min_price_level,
        max_price_level=body.max_price_level,
        cuisine=body.cuisine,
    )
    return payload


@app.post("/google-places/suggestions")
def google_places_suggestions(
    body: ProviderSuggestionsRequest,
    config: PlacesConfig = Depends(get_places_config),
) -> dict[str, Any]:
    logger.info(
        "Getting place suggestions for input: '%s', location: lat=%s, lng=%s",
        body.input, body.latitude, body.longitude,
    )
    try:
        return places_client.place_autocomplete(body, config)
    except (places_client.GooglePlacesError, requests.RequestException) as exc:
        logger.error("Google Places suggestions failed: %s", exc)
        raise HTTPException(status_code=502, detail="Google Places suggestions failed") from exc


@app.get("/google-places/details/{place_id}", response_model=ProviderPlaceDetails)
def google_places_details(
    place_id: str,
    config: PlacesConfig = Depends(get_places_config),
) -> ProviderPlaceDetails:
    try:
        details = places_client.place_details(place_id, config)
    except (places_client.GooglePlacesError, requests.RequestException) as exc:
        logger.error("Google Places details failed for %s: %s", place_id, exc)
        raise HTTPException(status_code=502, detail="Google Places details failed") from exc
    if details is None:
        raise HTTPException(status_code=404, detail="Place not found")
    return details


@app.get("/google-places/photo")
def google_places_photo(
    photo_reference: str = Query(..., min_length=1),
    max_width: int = Query(default=400, ge=1, le=1600),
    config: PlacesConfig = Depends(get_places_config),
) -> RedirectResponse:
    return RedirectResponse(places_client.photo_url(photo_reference, max_width, config), status_code=302)
