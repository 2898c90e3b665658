"""URL-safe base64 framing without padding."""

import base64
import binascii
import re

_URLSAFE_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def base64url_encode(data: bytes) -> str:
    """Encode *data* with the ``-_`` alphabet and strip ``=`` padding."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def base64url_decode(text: str) -> bytes:
    """Decode URL-safe base64, padded or not.

    Padding is restored to the next multiple of four before decoding.
    Characters outside the URL-safe alphabet are rejected.

    Raises:
        ValueError: If *text* is not valid URL-safe base64.
    """
    text = text.rstrip("=")
    if not _URLSAFE_ALPHABET.fullmatch(text):
        raise ValueError("Invalid character in base64url input")
    remainder = len(text) % 4
    if remainder:
        text += "=" * (4 - remainder)
    try:
        return base64.urlsafe_b64decode(text.encode("ascii"))
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64url input: {exc}") from exc
