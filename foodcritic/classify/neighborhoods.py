from __future__ import annotations

# Order matters: the first keyword found in the address wins.
NEIGHBORHOOD_TABLE: list[tuple[str, str]] = [
    ("downtown", "Downtown San Diego"),
    ("la jolla", "La Jolla"),
    ("gaslamp", "Gaslamp Quarter"),
    ("mission beach", "Mission Beach"),
    ("pacific beach", "Pacific Beach"),
    ("hillcrest", "Hillcrest"),
    ("north park", "North Park"),
    ("south park", "South Park"),
    ("mission valley", "Mission Valley"),
    ("little italy", "Little Italy"),
    ("coronado", "Coronado"),
    ("del mar", "Del Mar"),
    ("encinitas", "Encinitas"),
    ("carlsbad", "Carlsbad"),
]

# Label used when listing distinct neighborhoods.
OTHER_AREAS = "Other San Diego Areas"
# Label used in restaurant suggestion subtitles.
REGION_NAME = "San Diego"


def classify_neighborhood(address: str | None, fallback: str = OTHER_AREAS) -> str:
    """Return the neighborhood label for ``address`` or ``fallback`` when nothing matches."""
    if not address:
        return fallback
    lower = address.lower()
    for keyword, label in NEIGHBORHOOD_TABLE:
        if keyword in lower:
            return label
    return fallback
