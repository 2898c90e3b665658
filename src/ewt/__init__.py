"""Encrypted Web Tokens: encrypted, signed containers for opaque payloads."""

from ewt.base64url import base64url_decode, base64url_encode
from ewt.codec import EWTCodec, decode, decode_or_none, decode_text, encode, generate_iv
from ewt.constants import CipherAlgorithm, MacAlgorithm
from ewt.exceptions import (
    AuthenticationFailure,
    EWTError,
    InvalidIVError,
    MalformedTokenError,
    TokenRejectedError,
    UnsupportedAlgorithmError,
)
from ewt.keys import derive_key
from ewt.record import TokenRecord
from ewt.settings import EWTSettings, get_settings

__all__ = [
    "AuthenticationFailure",
    "CipherAlgorithm",
    "EWTCodec",
    "EWTError",
    "EWTSettings",
    "InvalidIVError",
    "MacAlgorithm",
    "MalformedTokenError",
    "TokenRecord",
    "TokenRejectedError",
    "UnsupportedAlgorithmError",
    "base64url_decode",
    "base64url_encode",
    "decode",
    "decode_or_none",
    "decode_text",
    "derive_key",
    "encode",
    "generate_iv",
    "get_settings",
]
