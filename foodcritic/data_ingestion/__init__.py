"""
Seed ingestion for the local restaurant store.

Responsibilities:
- Page through a Google Places text search for the region.
- Fetch details for each hit and map it onto the canonical Place schema.
- Keep in-region restaurants only and persist them as CSV for the store.
"""
