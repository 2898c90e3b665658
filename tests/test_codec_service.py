"""Tests for EWTCodec, the settings-bound codec."""

import logging
from typing import Any

import pytest

from ewt.base64url import base64url_encode
from ewt.codec import EWTCodec, encode
from ewt.exceptions import AuthenticationFailure, MalformedTokenError, UnsupportedAlgorithmError
from ewt.record import TokenRecord
from ewt.settings import EWTSettings

TEST_SECRET = "codec-service-secret"


def _test_settings(**overrides: Any) -> EWTSettings:
    return EWTSettings(**({"EWT_SECRET": TEST_SECRET} | overrides))


def _codec(**overrides: Any) -> EWTCodec:
    return EWTCodec(_test_settings(**overrides))


def test_encode_and_decode() -> None:
    """Tokens round-trip through the configured codec."""
    codec = _codec()
    assert codec.decode(codec.encode("hello")) == b"hello"
    assert codec.decode_text(codec.encode("hello")) == "hello"


def test_interoperates_with_functional_api() -> None:
    """A token from encode() with the same secret decodes in the codec."""
    assert _codec().decode(encode("x", TEST_SECRET)) == b"x"


def test_configured_algorithms_are_used() -> None:
    """EWT_HASH and EWT_CIPHER select the algorithms for new tokens."""
    codec = _codec(EWT_HASH="SHA512", EWT_CIPHER="aes-128-gcm")
    record = TokenRecord.from_token(codec.encode("x"))
    assert record.hash == "sha512"
    assert record.alg == "aes-128-gcm"
    assert codec.hash == "sha512"
    assert codec.alg == "aes-128-gcm"


def test_explicit_iv_passthrough() -> None:
    """An explicit IV makes codec output deterministic."""
    codec = _codec()
    assert codec.encode("x", iv="0123456789abcdef") == codec.encode("x", iv="0123456789abcdef")


@pytest.mark.parametrize("secret", ["", "   "])
def test_empty_secret_rejected(secret: str) -> None:
    """The codec refuses to run without a secret."""
    with pytest.raises(ValueError, match="EWT_SECRET"):
        _codec(EWT_SECRET=secret)


def test_unsupported_configured_algorithm_rejected() -> None:
    """A misconfigured cipher fails at construction time."""
    with pytest.raises(UnsupportedAlgorithmError):
        _codec(EWT_CIPHER="none")


def test_header_name_default_and_override() -> None:
    """header_name reflects EWT_HEADER_NAME."""
    assert _codec().header_name == "X-EWT"
    assert _codec(EWT_HEADER_NAME="X-EWToken").header_name == "X-EWToken"


def test_rejection_is_logged_without_secrets(caplog: pytest.LogCaptureFixture) -> None:
    """Rejections log the reason class but never the secret or payload."""
    token = encode("top-secret-payload", "some-other-secret")
    with caplog.at_level(logging.WARNING, logger="ewt.codec"), pytest.raises(AuthenticationFailure):
        _codec().decode(token)

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.reason == "AuthenticationFailure"  # type: ignore[attr-defined]
    assert TEST_SECRET not in caplog.text
    assert "top-secret-payload" not in caplog.text


def test_decode_text_logs_malformed(caplog: pytest.LogCaptureFixture) -> None:
    """decode_text logs and re-raises malformed tokens."""
    with caplog.at_level(logging.WARNING, logger="ewt.codec"), pytest.raises(MalformedTokenError):
        _codec().decode_text("garbage!")
    assert caplog.records[0].reason == "MalformedTokenError"  # type: ignore[attr-defined]


def test_decode_or_none() -> None:
    """decode_or_none returns None for rejected tokens."""
    codec = _codec()
    assert codec.decode_or_none(codec.encode("x")) == b"x"
    assert codec.decode_or_none("garbage") is None


def test_decode_or_none_on_nested_document(caplog: pytest.LogCaptureFixture) -> None:
    """Deeply nested documents are logged as malformed and return None."""
    token = base64url_encode(b"[" * 5000)
    with caplog.at_level(logging.WARNING, logger="ewt.codec"):
        assert _codec().decode_or_none(token) is None
    assert caplog.records[0].reason == "MalformedTokenError"  # type: ignore[attr-defined]
