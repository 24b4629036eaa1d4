"""Infrastructure Layer — database access and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver errors are mapped to core error types before leaving this layer
"""
