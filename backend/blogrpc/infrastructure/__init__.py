"""Infrastructure Layer — database, identity and logging adapters.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Store and identity failures are mapped to BlogError subclasses or propagate as 5xx

Design Decisions:
    - Each external collaborator behind one module (ADR: single responsibility)
"""
