"""API Schemas — Pydantic request/response models for the HTTP boundary.

Invariants:
    - Schemas never enforce business rules; the core raises typed errors for those
    - Response models read core views via from_attributes
"""
