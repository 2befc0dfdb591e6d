"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the SQLite rows so the API representation
(e.g. ``userID``, ``desc``) can differ from column names.
"""
