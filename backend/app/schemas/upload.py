"""Upload Schemas — response contract of the submission endpoint.

Invariants:
    - One UploadedImage per scale factor, name is the storage key as persisted
"""

from pydantic import BaseModel

from app.core.domain_types import UploadRecord


class UploadedImage(BaseModel):
    scale: int
    name: str

    @classmethod
    def from_record(cls, record: UploadRecord) -> "UploadedImage":
        return cls(scale=int(record.scale), name=record.name)


class ErrorMessage(BaseModel):
    """Body of every user-facing 4xx response."""
    message: str
