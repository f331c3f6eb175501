"""Core Layer — device state model, lock guards, mapping and error taxonomy.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic; IO happens behind repository_protocols

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
