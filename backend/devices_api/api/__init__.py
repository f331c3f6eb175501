"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (except 204)

Design Decisions:
    - Thin routes delegate to DeviceService (ADR: ExMA impureim sandwich)
"""
