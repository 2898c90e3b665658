"""Key material derivation from a caller-supplied secret."""

import hashlib


def derive_key(secret: str | bytes) -> bytes:
    """Return the hex SHA-256 digest of *secret* as 64 ASCII bytes.

    The full value is the HMAC key. Ciphers take a prefix of it sized to
    their key length, which is how OpenSSL treats an over-long key and keeps
    tokens interchangeable with other EWT implementations.
    """
    if isinstance(secret, str):
        secret = secret.encode("utf-8")
    return hashlib.sha256(secret).hexdigest().encode("ascii")
