"""StoredArtifact ORM — one encoded image variant, addressed by its storage key.

Invariants:
    - key is the primary key: {fingerprint}.{ext} or {fingerprint}_{scale}x.{ext}
    - data holds the encoded bytes exactly as produced by the encoder
    - content_type is the MIME type of the canonical output container

Design Decisions:
    - Natural key over surrogate id: content-addressing makes the key unique,
      and re-submission of identical bytes overwrites in place
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class StoredArtifact(Base):
    __tablename__ = "artifacts"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    content_type: Mapped[str] = mapped_column(String(64), nullable=False)
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    size_bytes: Mapped[int] = mapped_column(Integer, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
