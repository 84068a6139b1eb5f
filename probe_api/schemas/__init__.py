"""Pydantic Schemas — JSON payloads written to response bodies.

Invariants:
    - Schemas serialize only populated fields
"""
