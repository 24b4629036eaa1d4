"""API Layer — FastAPI routes, error handlers and envelope rendering.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every endpoint answers with a ResponseEnvelope
"""
