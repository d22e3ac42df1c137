"""ORM Models — SQLAlchemy declarative models for the database artifact backend.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from app.models.stored_artifact import StoredArtifact  # noqa: F401
