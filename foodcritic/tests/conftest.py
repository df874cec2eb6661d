from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from foodcritic import app as app_module
from foodcritic.discovery.models import Place
from foodcritic.places.config import PlacesConfig
from foodcritic.storage.places import PlaceStore

SAMPLE_PLACES = [
    Place(
        id="gaslamp-1",
        name="Gaslamp Grill",
        cuisine="American",
        address="123 Gaslamp Quarter, San Diego, CA",
        latitude=32.7115,
        longitude=-117.1597,
        price_level=2,
        open_now=True,
    ),
    Place(
        id="lajolla-1",
        name="La Jolla Sushi",
        cuisine="Japanese",
        address="7837 Girard Ave, La Jolla, CA",
        latitude=32.8473,
        longitude=-117.2742,
        price_level=3,
        open_now=False,
    ),
    Place(
        id="northpark-1",
        name="North Park Tacos",
        cuisine="Mexican",
        address="3000 University Ave, North Park, San Diego, CA",
        latitude=32.7484,
        longitude=-117.1300,
        price_level=1,
        open_now=True,
    ),
    Place(
        id="random-1",
        name="Random Diner",
        cuisine="American",
        address="999 Random St",
        latitude=32.8,
        longitude=-117.0,
    ),
    Place(
        id="la-1",
        name="Los Angeles Pizza",
        cuisine="Italian",
        address="6801 Hollywood Blvd, Los Angeles, CA",
        latitude=34.1016,
        longitude=-118.3267,
        price_level=2,
        open_now=True,
    ),
    Place(id="stub-1", name="Restaurant", cuisine="Restaurant"),
]

# reviewer -> score, per place; averages 4.0, 4.8, 3.5 and none for the rest
SAMPLE_RATINGS = {
    "gaslamp-1": [4, 4],
    "lajolla-1": [5, 5, 5, 5, 4],
    "northpark-1": [3, 4],
}


def build_store() -> PlaceStore:
    store = PlaceStore()
    for place in SAMPLE_PLACES:
        store.save(place)
    for place_id, scores in SAMPLE_RATINGS.items():
        for i, score in enumerate(scores):
            store.ratings.upsert(place_id, f"reviewer-{i}", score)
    return store


@pytest.fixture
def store() -> PlaceStore:
    return build_store()


@pytest.fixture
def client(store):
    disabled = PlacesConfig(api_key="", enabled=False)
    app_module.app.dependency_overrides[app_module.get_store] = lambda: store
    app_module.app.dependency_overrides[app_module.get_places_config] = lambda: disabled
    try:
        yield TestClient(app_module.app)
    finally:
        app_module.app.dependency_overrides.clear()
