"""
Geographic primitives.

Responsibilities:
- Define the fixed region (geofence) the service covers.
- Compute great-circle distances for scalars and numpy arrays.
"""
