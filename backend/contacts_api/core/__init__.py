"""Core Layer — envelope, error taxonomy and input validation.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (no IO, no async)
"""
