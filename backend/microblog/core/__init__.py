"""Core Layer — domain aggregates, validation, errors and repository contracts.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Everything here is pure and synchronous; IO lives behind repository_protocols

Design Decisions:
    - Functional core separated from imperative shell: services await the
      repositories and hand plain aggregates to the functions defined here
"""
