"""Pydantic Schemas — response contracts for API endpoints.

Design Decisions:
    - Separate from core dataclasses: schemas are API contracts, core types are domain
"""
