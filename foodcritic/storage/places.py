from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from ..classify.neighborhoods import OTHER_AREAS, classify_neighborhood
from ..discovery.models import Place, PlacePage
from ..geo.distance import distance_km_array
from ..geo.fence import SAN_DIEGO, BoundingBox, GeoFence
from .config import DEFAULT_STORE_CONFIG, StoreConfig
from .ratings import RatingStore

logger = logging.getLogger(__name__)

PLACE_COLUMNS: list[str] = [
    "id",
    "name",
    "cuisine",
    "address",
    "phone_number",
    "website",
    "latitude",
    "longitude",
    "price_level",
    "open_now",
    "user_ratings_total",
    "created_at",
]

# Read as text even when every value is digits (phone numbers, numeric ids)
TEXT_COLUMNS = ("id", "name", "cuisine", "address", "phone_number", "website")


def _na_to_none(value: Any) -> Any:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


def _record_from_row(row: dict[str, Any]) -> dict[str, Any]:
    """Normalise a CSV / DataFrame row into a plain record (NaN -> None, ints restored)."""
    record = {col: _na_to_none(row.get(col)) for col in PLACE_COLUMNS}
    record["id"] = str(record["id"])
    for col in ("price_level", "user_ratings_total"):
        if record[col] is not None:
            record[col] = int(record[col])
    if record["open_now"] is not None and not isinstance(record["open_now"], bool):
        record["open_now"] = str(record["open_now"]).strip().lower() in {"true", "1"}
    if record["created_at"] is None:
        record.pop("created_at")
    return record


class PlaceStore:
    """Restaurants keyed by place id, queried through a pandas DataFrame view.

    Writes go to the keyed record map under a lock; the DataFrame used for
    region and distance queries is rebuilt lazily after each write.
    """

    def __init__(self, fence: GeoFence = SAN_DIEGO, ratings: RatingStore | None = None) -> None:
        self.fence = fence
        self.ratings = ratings if ratings is not None else RatingStore()
        self._records: dict[str, dict[str, Any]] = {}
        self._lock = threading.RLock()
        self._frame_cache: pd.DataFrame | None = None

    # ── Loading / export ────────────────────────────────────────────────

    @classmethod
    def from_csv(cls, path: Path, fence: GeoFence = SAN_DIEGO, ratings: RatingStore | None = None) -> PlaceStore:
        store = cls(fence=fence, ratings=ratings)
        df = pd.read_csv(path, dtype={col: str for col in TEXT_COLUMNS})
        for row in df.to_dict(orient="records"):
            store.save(Place(**_record_from_row(row)))
        logger.info("Loaded %d restaurants from %s", len(store), path)
        return store

    def to_csv(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        df = self._frame().copy()
        df["created_at"] = df["created_at"].apply(lambda d: d.isoformat() if d is not None else None)
        df.to_csv(path, index=False)
        return path

    def __len__(self) -> int:
        return len(self._records)

    # ── Writes ──────────────────────────────────────────────────────────

    def save(self, place: Place) -> Place:
        """Insert or replace the place stored under ``place.id``."""
        record = place.model_dump(include=set(PLACE_COLUMNS))
        with self._lock:
            self._records[place.id] = record
            self._frame_cache = None
        return self._materialize(record)

    def insert_if_absent(self, place: Place) -> tuple[Place, bool]:
        """Atomically store ``place`` unless its id is taken.

        Returns the stored place and whether this call created it.
        """
        with self._lock:
            existing = self._records.get(place.id)
            if existing is not None:
                return self._materialize(existing), False
            record = place.model_dump(include=set(PLACE_COLUMNS))
            self._records[place.id] = record
            self._frame_cache = None
        return self._materialize(record), True

    # ── Reads ───────────────────────────────────────────────────────────

    def find_by_id(self, place_id: str) -> Place | None:
        with self._lock:
            record = self._records.get(place_id)
        return self._materialize(record) if record is not None else None

    def find_all(self) -> list[Place]:
        return self._to_places(self._frame())

    def find_all_in_region(self) -> list[Place]:
        df = self._frame()
        in_region = df.loc[self._box_mask(df, self.fence.bounds)]
        return self._to_places(in_region.sort_values("name", kind="mergesort"))

    def find_all_in_region_paged(self, offset: int, size: int) -> PlacePage:
        places = self.find_all_in_region()
        offset = max(0, offset)
        size = max(0, size)
        return PlacePage(items=places[offset:offset + size], total=len(places), offset=offset, size=size)

    def find_in_bounding_box(self, box: BoundingBox) -> list[Place]:
        df = self._frame()
        return self._to_places(df.loc[self._box_mask(df, box)])

    def find_nearby_in_region(self, lat: float, lng: float, radius_km: float) -> list[Place]:
        """In-region places within ``radius_km`` of (lat, lng), nearest first."""
        box = self.fence.bounds.intersect(BoundingBox.around(lat, lng, radius_km))
        return self._within_radius(box, lat, lng, radius_km)

    def find_within_radius(self, lat: float, lng: float, radius_km: float) -> list[Place]:
        """Same as :meth:`find_nearby_in_region` without the geofence."""
        return self._within_radius(BoundingBox.around(lat, lng, radius_km), lat, lng, radius_km)

    def find_by_neighborhood_in_region(self, term: str) -> list[Place]:
        term = (term or "").strip().lower()
        df = self._frame()
        mask = self._box_mask(df, self.fence.bounds)
        if term:
            mask = mask & df["address"].fillna("").str.lower().str.contains(term, regex=False)
        return self._to_places(df.loc[mask])

    def find_distinct_cuisines_in_region(self) -> list[str]:
        df = self._frame()
        cuisines = df.loc[self._box_mask(df, self.fence.bounds), "cuisine"].dropna()
        return sorted(set(cuisines.astype(str)))

    def find_distinct_neighborhoods_in_region(self) -> list[str]:
        df = self._frame()
        addresses = df.loc[self._box_mask(df, self.fence.bounds), "address"]
        return sorted({classify_neighborhood(_na_to_none(a), OTHER_AREAS) for a in addresses})

    def find_all_ordered_by_rating(self) -> list[Place]:
        places = self.find_all()
        # Unrated places sort last, as NULLS LAST would
        return sorted(places, key=lambda p: (p.review_count == 0, -p.average_rating))

    # ── Internals ───────────────────────────────────────────────────────

    def _frame(self) -> pd.DataFrame:
        with self._lock:
            if self._frame_cache is None:
                df = pd.DataFrame.from_records(list(self._records.values()), columns=PLACE_COLUMNS)
                df["latitude"] = pd.to_numeric(df["latitude"], errors="coerce")
                df["longitude"] = pd.to_numeric(df["longitude"], errors="coerce")
                self._frame_cache = df
            return self._frame_cache

    @staticmethod
    def _box_mask(df: pd.DataFrame, box: BoundingBox) -> pd.Series:
        # Rows without coordinates compare NaN and fall out of every box
        return df["latitude"].between(box.min_lat, box.max_lat) & df["longitude"].between(
            box.min_lng, box.max_lng
        )

    def _within_radius(self, box: BoundingBox, lat: float, lng: float, radius_km: float) -> list[Place]:
        df = self._frame()
        candidates = df.loc[self._box_mask(df, box)]
        if candidates.empty:
            return []
        distances = distance_km_array(
            lat, lng, candidates["latitude"].to_numpy(), candidates["longitude"].to_numpy()
        )
        keep = distances <= radius_km
        order = np.argsort(distances[keep], kind="stable")
        return self._to_places(candidates.loc[keep].iloc[order])

    def _to_places(self, df: pd.DataFrame) -> list[Place]:
        if df.empty:
            return []
        aggregates = self.ratings.aggregates()
        return [
            self._materialize(self._records[str(place_id)], aggregates)
            for place_id in df["id"]
        ]

    def _materialize(
        self,
        record: dict[str, Any],
        aggregates: dict[str, tuple[float, int]] | None = None,
    ) -> Place:
        if aggregates is None:
            aggregates = self.ratings.aggregates()
        average, count = aggregates.get(record["id"], (0.0, 0))
        return Place(**record, average_rating=average, review_count=count)


_store: PlaceStore | None = None
_store_lock = threading.Lock()


def get_place_store(config: StoreConfig = DEFAULT_STORE_CONFIG) -> PlaceStore:
    """Return the process-wide store, loading the seed CSV on first call."""
    global _store
    with _store_lock:
        if _store is None:
            if config.data_path.exists():
                _store = PlaceStore.from_csv(config.data_path)
            else:
                logger.warning("No restaurant data at %s; starting with an empty store", config.data_path)
                _store = PlaceStore()
        return _store
