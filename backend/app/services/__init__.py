"""Services Layer — image ingestion pipeline and variant upload fan-out.

Invariants:
    - Services orchestrate core/ functions and the ArtifactStore protocol
    - No HTTP types cross into this layer (routes pass bytes and ImageFormat)
"""
