"""Devices API Package — device catalog with state-guarded lifecycle rules.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
