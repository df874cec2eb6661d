from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Place(BaseModel):
    """A restaurant record. ``id`` is the Google place id for resolved places."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    cuisine: str = "Restaurant"
    address: str | None = None
    phone_number: str | None = None
    website: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    price_level: int | None = Field(default=None, ge=0, le=4)
    open_now: bool | None = None
    user_ratings_total: int | None = None
    created_at: datetime = Field(default_factory=_utcnow)

    # Derived from the rating collection on read, never persisted.
    average_rating: float = 0.0
    review_count: int = 0

    @model_validator(mode="after")
    def _coordinates_paired(self) -> Place:
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        return self

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class Rating(BaseModel):
    place_id: str = Field(..., min_length=1)
    reviewer: str = Field(..., min_length=1)
    score: int = Field(..., ge=1, le=5)
    comment: str | None = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class RatingRequest(BaseModel):
    reviewer: str = Field(..., min_length=1)
    score: int = Field(..., ge=1, le=5)
    comment: str | None = Field(default=None, max_length=1000)


class SortKey(str, Enum):
    rating = "rating"
    name = "name"
    distance = "distance"


class SearchCriteria(BaseModel):
    name: str | None = None
    cuisine: str | None = None
    price_level: int | None = Field(default=None, ge=0, le=4)
    open_now: bool | None = None
    min_rating: float | None = Field(default=None, ge=0.0, le=5.0)
    sort_by: SortKey | None = None
    latitude: float | None = None
    longitude: float | None = None

    @property
    def reference(self) -> tuple[float, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return self.latitude, self.longitude


class PlacePage(BaseModel):
    items: list[Place]
    total: int
    offset: int
    size: int


# ── Autocomplete suggestions ─────────────────────────────────────────────


class _SuggestionBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    subtitle: str

    def identity(self) -> tuple[str, str, str, str]:
        return (self.id, self.type, self.title, self.subtitle)  # type: ignore[attr-defined]


class RestaurantSuggestion(_SuggestionBase):
    type: Literal["restaurant"] = "restaurant"
    restaurant: Place


class CuisineSuggestion(_SuggestionBase):
    type: Literal["cuisine"] = "cuisine"


class NeighborhoodSuggestion(_SuggestionBase):
    type: Literal["neighborhood"] = "neighborhood"


AutocompleteSuggestion = Annotated[
    Union[RestaurantSuggestion, CuisineSuggestion, NeighborhoodSuggestion],
    Field(discriminator="type"),
]


class AutocompleteResponse(BaseModel):
    suggestions: list[AutocompleteSuggestion]
