"""Core Layer — pure request routing, no IO beyond the environment read.

Invariants:
    - No module in core/ imports from api/, adapters/, or infrastructure/
    - route() is deterministic given method, path, query, clock and environment

Design Decisions:
    - Functional core shared by both deployment shapes; adapters stay thin
"""
