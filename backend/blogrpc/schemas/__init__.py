"""Pydantic Schemas — request/response validation for RPC operations.

Invariants:
    - Schemas validate at system boundary (RPC payloads, RPC responses)
    - Wire format is camelCase JSON

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
