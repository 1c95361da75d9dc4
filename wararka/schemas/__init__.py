# wararka/schemas/__init__.py
"""Pydantic response schemas."""
