"""Services Layer — repositories, authorization gate, RPC handlers and dispatch.

Invariants:
    - Handlers split by audience (public, admin)
    - RPC dispatch uses explicit dict mapping (no auto-discovery)

Design Decisions:
    - Imperative shell around core/: services do the IO, core decides
"""
