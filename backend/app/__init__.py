"""upix Application Package — image ingestion and multi-resolution persistence.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
