from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, lat: float | None, lng: float | None) -> bool:
        if lat is None or lng is None:
            return False
        # NaN compares false against every bound
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng

    @classmethod
    def around(cls, lat: float, lng: float, radius_km: float) -> BoundingBox:
        """Approximate box enclosing a circle of ``radius_km`` (1 degree ~ 111 km)."""
        radius_deg = radius_km / 111.0
        lng_span = radius_deg / math.cos(math.radians(lat))
        return cls(
            min_lat=lat - radius_deg,
            max_lat=lat + radius_deg,
            min_lng=lng - abs(lng_span),
            max_lng=lng + abs(lng_span),
        )

    def intersect(self, other: BoundingBox) -> BoundingBox:
        return BoundingBox(
            min_lat=max(self.min_lat, other.min_lat),
            max_lat=min(self.max_lat, other.max_lat),
            min_lng=max(self.min_lng, other.min_lng),
            max_lng=min(self.max_lng, other.max_lng),
        )


@dataclass(frozen=True)
class GeoFence:
    """Named rectangular region gating what counts as "in region"."""

    name: str
    bounds: BoundingBox

    def contains(self, lat: float | None, lng: float | None) -> bool:
        return self.bounds.contains(lat, lng)


SAN_DIEGO = GeoFence(
    name="San Diego",
    bounds=BoundingBox(
        min_lat=32.534156,
        max_lat=33.114249,
        min_lng=-117.608643,
        max_lng=-116.908707,
    ),
)
