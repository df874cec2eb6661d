"""
Google Places integration.

Responsibilities:
- Manage Google Places API configuration and credentials.
- Call the details and text-search endpoints.
- Resolve unknown place ids into local restaurants, falling back to a
  stub record when Google is unavailable or returns nothing usable.
"""
