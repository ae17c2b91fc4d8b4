"""Services Layer — relationship graph, post lifecycle, timeline and the profile facade.

Invariants:
    - Services are request-scoped: no background work, timers or caches
    - Every invariant check runs against aggregates freshly read in the same call
    - Repository calls are awaited strictly in sequence

Design Decisions:
    - One file per component; ProfileService composes the others and is the
      only entry point the transport layer uses
"""
