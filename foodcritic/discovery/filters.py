from __future__ import annotations

from typing import Any, Iterable, Sequence

from .models import Place, SearchCriteria


def _clean(term: str | None) -> str | None:
    if term is None:
        return None
    term = term.strip().lower()
    return term or None


def apply_filters(candidates: Iterable[Place], criteria: SearchCriteria) -> list[Place]:
    """Narrow ``candidates`` by every field set on ``criteria``; input order is kept.

    A place lacking the attribute an enabled filter needs is dropped.
    """
    name = _clean(criteria.name)
    cuisine = _clean(criteria.cuisine)

    result: list[Place] = []
    for place in candidates:
        if name is not None and (place.name is None or name not in place.name.lower()):
            continue
        if cuisine is not None and (place.cuisine is None or cuisine not in place.cuisine.lower()):
            continue
        if criteria.price_level is not None and place.price_level != criteria.price_level:
            continue
        if criteria.open_now is not None and place.open_now != criteria.open_now:
            continue
        if criteria.min_rating is not None and place.average_rating < criteria.min_rating:
            continue
        result.append(place)
    return result


def filter_provider_results(
    results: Sequence[dict[str, Any]] | None,
    min_rating: float | None = None,
    min_price_level: int | None = None,
    max_price_level: int | None = None,
    cuisine: str | None = None,
) -> list[dict[str, Any]]:
    """Filter raw Google Places search results.

    Price is an inclusive range here; results without a price level pass it.
    Cuisine matches any category tag, falling back to the place name.
    """
    keyword = _clean(cuisine)
    kept: list[dict[str, Any]] = []
    for result in results or []:
        if min_rating is not None:
            rating = result.get("rating")
            if rating is None or rating < min_rating:
                continue

        price = result.get("price_level")
        if price is not None:
            if min_price_level is not None and price < min_price_level:
                continue
            if max_price_level is not None and price > max_price_level:
                continue

        if keyword is not None:
            types = result.get("types") or []
            matches = any(keyword in t.lower() for t in types)
            if not matches and result.get("name"):
                matches = keyword in result["name"].lower()
            if not matches:
                continue

        kept.append(result)
    return kept
