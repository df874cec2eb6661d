"""
FoodCritic restaurant discovery service.

Responsibilities:
- Keep a local store of San Diego restaurants keyed by Google place id.
- Filter, sort and autocomplete over the in-region restaurants.
- Resolve unknown place ids against Google Places on first reference.
"""
