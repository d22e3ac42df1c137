"""Controllable ArtifactStore fakes for orchestrator and route tests."""

import asyncio

from app.infrastructure.artifact_stores import InMemoryArtifactStore


def scale_of_key(key: str) -> int:
    """Scale factor encoded in a storage key ({fp}.png → 1, {fp}_8x.png → 8)."""
    stem = key.rsplit(".", 1)[0]
    if "_" not in stem:
        return 1
    return int(stem.rsplit("_", 1)[1].rstrip("x"))


class RecordingArtifactStore(InMemoryArtifactStore):
    """In-memory store that records calls and can fail or stall chosen scales."""

    def __init__(
        self,
        fail_scales: frozenset[int] = frozenset(),
        hang_scales: frozenset[int] = frozenset(),
        hang_seconds: float = 1.0,
        healthy: bool = True,
    ):
        super().__init__()
        self.fail_scales = fail_scales
        self.hang_scales = hang_scales
        self.hang_seconds = hang_seconds
        self.healthy = healthy
        self.calls: list[tuple[str, str, int]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def put(self, key, data, content_type):
        self.calls.append((key, content_type, len(data)))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            # let sibling tasks start before this one finishes
            await asyncio.sleep(0.01)
            scale = scale_of_key(key)
            if scale in self.hang_scales:
                await asyncio.sleep(self.hang_seconds)
            if scale in self.fail_scales:
                raise ConnectionError(f"simulated outage for {key}")
            await super().put(key, data, content_type)
        finally:
            self.in_flight -= 1

    async def ping(self) -> bool:
        return self.healthy
