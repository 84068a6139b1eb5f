"""API Layer — FastAPI glue for the long-running server.

Invariants:
    - Routes never contain business logic (delegate to core.routing)

Design Decisions:
    - Single catch-all route: the routing table lives in core/, not in FastAPI
"""
