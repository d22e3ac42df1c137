"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validation, hashing, decoding and derivation are synchronous and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the shell owns all awaits
"""
