from __future__ import annotations

import threading
from datetime import datetime, timezone

import pandas as pd

from ..discovery.models import Rating


class RatingStore:
    """In-memory rating collection, one rating per (reviewer, place)."""

    def __init__(self) -> None:
        self._ratings: dict[tuple[str, str], Rating] = {}
        self._lock = threading.Lock()

    def upsert(
        self,
        place_id: str,
        reviewer: str,
        score: int,
        comment: str | None = None,
    ) -> Rating:
        key = (reviewer, place_id)
        with self._lock:
            existing = self._ratings.get(key)
            if existing is None:
                rating = Rating(place_id=place_id, reviewer=reviewer, score=score, comment=comment)
            else:
                rating = Rating(
                    place_id=place_id,
                    reviewer=reviewer,
                    score=score,
                    comment=comment,
                    created_at=existing.created_at,
                    updated_at=datetime.now(timezone.utc),
                )
            self._ratings[key] = rating
        return rating

    def find_by_place(self, place_id: str) -> list[Rating]:
        with self._lock:
            found = [r for r in self._ratings.values() if r.place_id == place_id]
        return sorted(found, key=lambda r: r.created_at, reverse=True)

    def find_by_reviewer(self, reviewer: str) -> list[Rating]:
        with self._lock:
            found = [r for r in self._ratings.values() if r.reviewer == reviewer]
        return sorted(found, key=lambda r: r.created_at, reverse=True)

    def find_recent(self, limit: int) -> list[Rating]:
        if limit <= 0:
            return []
        with self._lock:
            found = list(self._ratings.values())
        return sorted(found, key=lambda r: r.created_at, reverse=True)[:limit]

    def aggregates(self) -> dict[str, tuple[float, int]]:
        """Return ``{place_id: (average score, count)}`` for rated places."""
        with self._lock:
            rows = [{"place_id": r.place_id, "score": r.score} for r in self._ratings.values()]
        if not rows:
            return {}
        df = pd.DataFrame(rows)
        grouped = df.groupby("place_id")["score"].agg(["mean", "count"])
        return {
            str(place_id): (float(row["mean"]), int(row["count"]))
            for place_id, row in grouped.iterrows()
        }

    def clear(self) -> None:
        with self._lock:
            self._ratings.clear()
