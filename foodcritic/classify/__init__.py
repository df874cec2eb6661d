"""
Keyword classifiers.

Responsibilities:
- Map a free-text address to a named San Diego neighborhood.
- Map Google Places category tags to a single cuisine label.

Both are ordered priority tables evaluated first-match-wins.
"""
