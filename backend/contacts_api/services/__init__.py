"""Service Layer — request orchestration (validate, persist, respond).

Invariants:
    - Services never raise past their public methods; every call returns an Outcome
"""
