"""Infrastructure Layer — artifact store backends and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - Backend faults are mapped to UpixError subclasses before leaving this layer

Design Decisions:
    - Thin async wrappers over raw clients (SQLAlchemy engine, MinIO client)
"""
