from __future__ import annotations

from typing import Iterable

DEFAULT_CUISINE = "Restaurant"

# Highest priority first, independent of the order Google lists the tags in.
CUISINE_PRIORITY: list[tuple[str, str]] = [
    ("restaurant", "Restaurant"),
    ("food", "Food"),
    ("cafe", "Cafe"),
    ("bakery", "Bakery"),
    ("bar", "Bar"),
    ("meal_takeaway", "Takeaway"),
    ("meal_delivery", "Delivery"),
]


def classify_cuisine(types: Iterable[str] | None) -> str:
    tags = {t.strip().lower() for t in types or [] if t}
    if not tags:
        return DEFAULT_CUISINE
    for tag, label in CUISINE_PRIORITY:
        if tag in tags:
            return label
    return DEFAULT_CUISINE
