"""
Blog about CAD software.

Responsibilities:
- Store blog posts with draft/published status and unique slugs.
- Serve published posts newest first with reading-time estimates.
- Produce starter drafts for admins (LLM-assisted, templated fallback).
"""
