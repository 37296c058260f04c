"""Pydantic schema definitions for API payloads."""
