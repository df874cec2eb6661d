from __future__ import annotations

import math
from typing import Iterable

from ..geo.distance import distance_km
from .models import Place, SortKey


def _distance_key(reference: tuple[float, float]):
    ref_lat, ref_lng = reference

    def key(place: Place) -> float:
        if not place.has_coordinates:
            return math.inf
        return distance_km(ref_lat, ref_lng, place.latitude, place.longitude)

    return key


def sort_places(
    candidates: Iterable[Place],
    sort_by: SortKey | str | None,
    reference: tuple[float, float] | None = None,
) -> list[Place]:
    """Return ``candidates`` ordered by ``sort_by``.

    ``sorted`` is stable, so ties keep their input order. Distance ordering
    without a reference point, or an unknown key, leaves the order untouched.
    """
    places = list(candidates)
    if sort_by is None:
        return places
    try:
        key = SortKey(sort_by)
    except ValueError:
        return places

    if key is SortKey.rating:
        return sorted(places, key=lambda p: p.average_rating or 0.0, reverse=True)
    if key is SortKey.name:
        return sorted(places, key=lambda p: p.name)
    if key is SortKey.distance and reference is not None:
        return sorted(places, key=_distance_key(reference))
    return places
