"""Contacts API Package — CRUD service with a uniform response envelope.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
