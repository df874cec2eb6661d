"""
Local persistence for restaurants and their ratings.

Responsibilities:
- Keep restaurants keyed by place id with an atomic insert-if-absent.
- Answer the region, bounding-box and radius queries used by discovery.
- Derive average rating and review count from the rating collection.
"""
