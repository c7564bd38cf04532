"""API Schemas — Pydantic models for response rendering."""
