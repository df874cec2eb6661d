"""
Restaurant discovery engine.

Responsibilities:
- Scope every listing to the configured region (geofence).
- Filter candidates by name, cuisine, price, open-now and minimum rating.
- Sort by rating, name or distance from a reference point.
- Build quota-split autocomplete suggestions across three entity types.
"""
