"""Error Hierarchy — tests for the UserFacing/Opaque conversion.

Invariants:
    - Input errors convert to UserFacing with their message
    - Payload and infrastructure errors convert to Opaque (status only)
    - Opaque carries no message attribute at all
"""

from dataclasses import fields

from app.core.errors import (
    ErrorCategory,
    ErrorContext,
    EncodingError,
    MissingContentTypeError,
    Opaque,
    PayloadTooLargeError,
    PersistenceError,
    StorageUnavailableError,
    UploadFailedError,
    UpixError,
    UserFacing,
    to_failure,
)


def test_input_error_is_user_facing():
    assert to_failure(MissingContentTypeError()) == UserFacing(
        400, "missing Content-Type header",
    )


def test_payload_too_large_is_bare_413():
    assert to_failure(PayloadTooLargeError(512 * 1024)) == Opaque(413)


def test_infrastructure_errors_are_opaque_500():
    for exc in (
        EncodingError("bad mode"),
        StorageUnavailableError("no binding"),
        PersistenceError("network down", "abc.png"),
        UploadFailedError([2, 16], 5),
    ):
        assert isinstance(exc, UpixError)
        assert to_failure(exc) == Opaque(500)


def test_opaque_has_no_message():
    assert not hasattr(Opaque(500), "message")


def test_persistence_error_records_key_in_context():
    err = PersistenceError("timeout", "abc_4x.png")
    assert err.key == "abc_4x.png"
    assert err.log_extra()["storage_key"] == "abc_4x.png"
    assert err.category is ErrorCategory.STORAGE


def test_upload_failed_lists_failed_scales():
    err = UploadFailedError([4, 8], 5)
    assert err.failed_scales == [4, 8]
    assert "2 of 5" in err.message
    assert err.public_message is None


def test_error_context_fields():
    assert [f.name for f in fields(ErrorContext)] == [
        "timestamp", "fingerprint", "scale", "storage_key",
    ]
