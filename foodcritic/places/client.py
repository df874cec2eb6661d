"""Client utilities for the Google Places API."""
from __future__ import annotations

import logging
from typing import Any

import requests
from pydantic import ValidationError

from .config import DEFAULT_PLACES_CONFIG, PlacesConfig
from .models import ProviderPlaceDetails, ProviderSearchRequest, ProviderSuggestionsRequest

logger = logging.getLogger(__name__)
_SESSION = requests.Session()

DETAILS_FIELDS = (
    "place_id,name,formatted_address,formatted_phone_number,website,rating,"
    "user_ratings_total,price_level,types,geometry,opening_hours"
)


class GooglePlacesError(RuntimeError):
    """Raised when the Places API returns a non-successful response."""


def _get(path: str, params: dict[str, Any], config: PlacesConfig) -> dict[str, Any]:
    params = {**params, "key": config.api_key}
    response = _SESSION.get(f"{config.base_url}/{path}", params=params, timeout=config.timeout)
    response.raise_for_status()
    payload = response.json()
    status = payload.get("status")
    if status not in {"OK", "ZERO_RESULTS"}:
        logger.error("%s failed: status=%s, error_message=%s", path, status, payload.get("error_message"))
        raise GooglePlacesError(payload.get("error_message") or status)
    return payload


def place_details(place_id: str, config: PlacesConfig = DEFAULT_PLACES_CONFIG) -> ProviderPlaceDetails | None:
    """Fetch details for ``place_id``; ``None`` when Google has no result for it."""
    payload = _get("details/json", {"place_id": place_id, "fields": DETAILS_FIELDS}, config)
    result = payload.get("result")
    if not result:
        return None
    try:
        return ProviderPlaceDetails.model_validate(result)
    except ValidationError as exc:
        logger.error("details/json returned a malformed result for %s: %s", place_id, exc)
        raise GooglePlacesError(f"Malformed details result for {place_id}") from exc


def text_search(
    request: ProviderSearchRequest,
    config: PlacesConfig = DEFAULT_PLACES_CONFIG,
) -> dict[str, Any]:
    """Run a text search; a ``page_token`` on the request continues a previous one."""
    if request.page_token:
        params: dict[str, Any] = {"pagetoken": request.page_token}
    else:
        params = {
            "query": (request.query or "").strip() or "restaurants",
            "location": f"{request.latitude},{request.longitude}",
            "radius": request.radius,
            "type": request.type,
        }
    return _get("textsearch/json", params, config)


def place_autocomplete(
    request: ProviderSuggestionsRequest,
    config: PlacesConfig = DEFAULT_PLACES_CONFIG,
) -> dict[str, Any]:
    """Google's own place predictions for ``request.input``, biased to a location when one is given."""
    params: dict[str, Any] = {"input": request.input}
    if request.latitude is not None and request.longitude is not None:
        params["location"] = f"{request.latitude},{request.longitude}"
        if request.radius is not None:
            params["radius"] = request.radius
    if request.types and request.types.strip():
        params["types"] = request.types.strip()
    return _get("autocomplete/json", params, config)


def photo_url(photo_reference: str, max_width: int = 400, config: PlacesConfig = DEFAULT_PLACES_CONFIG) -> str:
    params = {"photoreference": photo_reference, "maxwidth": max_width, "key": config.api_key}
    return requests.Request("GET", f"{config.base_url}/photo", params=params).prepare().url
