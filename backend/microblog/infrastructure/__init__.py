"""Infrastructure Layer — storage adapters and cross-cutting concerns.

Invariants:
    - Adapters implement core/repository_protocols.py and nothing else
    - Every storage failure is mapped to DatabaseError before leaving this layer
"""
