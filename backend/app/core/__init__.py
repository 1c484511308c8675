"""Core Layer — entities, error taxonomy, persistence contract, pure engines.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - enforce_access and expand_template are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
