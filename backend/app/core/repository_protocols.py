"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Artifact persistence accessed through the ArtifactStore Protocol only
    - Implementations provided by shell via dependency injection, one handle per request

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no base class
    - put() signals failure by raising; the orchestrator treats every exception
      from put() uniformly as a persistence failure for that variant
"""

from typing import Protocol

from app.core.domain_types import StorageKey


class ArtifactStore(Protocol):
    """Durable key/value object store — implemented by shell."""

    async def put(
        self, key: StorageKey, data: bytes, content_type: str,
    ) -> None: ...

    async def ping(self) -> bool: ...
