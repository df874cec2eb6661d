from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderLocation(BaseModel):
    lat: float | None = None
    lng: float | None = None


class ProviderGeometry(BaseModel):
    location: ProviderLocation | None = None


class ProviderOpeningHours(BaseModel):
    open_now: bool | None = None


class ProviderPlaceDetails(BaseModel):
    """The subset of a Google Places details ``result`` this service reads."""

    model_config = ConfigDict(extra="ignore")

    place_id: str | None = None
    name: str | None = None
    formatted_address: str | None = None
    formatted_phone_number: str | None = None
    website: str | None = None
    rating: float | None = None
    user_ratings_total: int | None = None
    price_level: int | None = None
    types: list[str] = Field(default_factory=list)
    geometry: ProviderGeometry | None = None
    opening_hours: ProviderOpeningHours | None = None


class ProviderSearchRequest(BaseModel):
    query: str | None = None
    latitude: float = 32.7157
    longitude: float = -117.1611
    radius: int = Field(default=5000, ge=1, le=50000)
    type: str = "restaurant"
    min_rating: float | None = Field(default=None, ge=0.0, le=5.0)
    min_price_level: int | None = Field(default=None, ge=0, le=4)
    max_price_level: int | None = Field(default=None, ge=0, le=4)
    cuisine: str | None = None
    page_token: str | None = None


class ProviderSuggestionsRequest(BaseModel):
    input: str = Field(min_length=1)
    latitude: float | None = None
    longitude: float | None = None
    radius: int | None = Field(default=None, ge=1, le=50000)
    types: str | None = None

    @field_validator("input")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("input must not be blank")
        return value
