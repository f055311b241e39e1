"""
CAD software catalog.

Responsibilities:
- Hold the validated catalog of software entries (one record per version).
- Group entries sharing a name into software families.
- Score and rank entries against finished quiz answers.
- Provide the display, comparison and trending views used by the API.
"""
