"""Content Hashing — tests for the SHA-256 fingerprint."""

from app.core.content_hash import fingerprint


def test_known_vectors():
    assert fingerprint(b"") == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )
    assert fingerprint(b"abc") == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_fingerprint_is_deterministic_lowercase_hex():
    data = bytes(range(256)) * 4
    first = fingerprint(data)
    assert first == fingerprint(data)
    assert len(first) == 64
    assert first == first.lower()
    int(first, 16)


def test_single_byte_change_changes_fingerprint():
    assert fingerprint(b"\x00" * 32) != fingerprint(b"\x00" * 31 + b"\x01")
