"""
Catalog ingestion package.

Responsibilities:
- Read the hand-authored CAD software source lists.
- Normalize them into the canonical catalog schema, re-issuing unique ids.
- Persist the processed catalog locally for the API to load.
"""
