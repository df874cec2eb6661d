from __future__ import annotations

import numpy as np

EARTH_RADIUS_KM = 6371.0


def distance_km_array(lat1, lng1, lat2, lng2) -> np.ndarray:
    """Haversine distance in kilometres; accepts scalars or numpy arrays."""
    lat1 = np.radians(np.asarray(lat1, dtype=float))
    lng1 = np.radians(np.asarray(lng1, dtype=float))
    lat2 = np.radians(np.asarray(lat2, dtype=float))
    lng2 = np.radians(np.asarray(lng2, dtype=float))

    a = (
        np.sin((lat2 - lat1) / 2.0) ** 2
        + np.cos(lat1) * np.cos(lat2) * np.sin((lng2 - lng1) / 2.0) ** 2
    )
    c = 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))
    return EARTH_RADIUS_KM * c


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    return float(distance_km_array(lat1, lng1, lat2, lng2))
