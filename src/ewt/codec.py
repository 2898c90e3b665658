"""Encrypted Web Token encoding and decoding.

An EWT wraps an opaque payload in a URL-safe string::

    base64url({"a": cipher, "i": iv, "h": mac, "s": HMAC(plaintext), "p": base64(ciphertext)})

The HMAC is taken over the plaintext and checked after decryption. A
payload is only ever returned once that check succeeds.
"""

import hashlib
import logging
import secrets

from ewt.constants import DEFAULT_CIPHER, DEFAULT_HASH, IV_LENGTH, IV_SEED_BYTES
from ewt.exceptions import AuthenticationFailure, EWTError, InvalidIVError, MalformedTokenError
from ewt.keys import derive_key
from ewt.primitives import (
    DecryptionError,
    cipher_spec,
    decrypt,
    encrypt,
    resolve_cipher,
    resolve_mac,
    sign,
    verify,
)
from ewt.record import TokenRecord
from ewt.settings import EWTSettings

logger = logging.getLogger(__name__)


def generate_iv() -> str:
    """Return a fresh 16-character hex IV drawn from a secure random source."""
    return hashlib.sha256(secrets.token_bytes(IV_SEED_BYTES)).hexdigest()[:IV_LENGTH]


def encode(
    payload: str | bytes | bytearray | memoryview,
    secret: str | bytes,
    hash: str = DEFAULT_HASH,
    alg: str = DEFAULT_CIPHER,
    iv: str | bytes | None = None,
) -> str:
    """Encrypt and sign *payload*, returning the EWT string.

    Args:
        payload: Data to protect. Text is UTF-8 encoded.
        secret: Shared secret; the key is derived from it on every call.
        hash: HMAC digest name, ``sha256`` by default.
        alg: Cipher name, ``aes-256-ctr`` by default.
        iv: ASCII IV of the cipher's IV size. Generated when omitted.

    Raises:
        UnsupportedAlgorithmError: If *hash* or *alg* is not allowed.
        InvalidIVError: If *iv* is not ASCII or has the wrong length.
        TypeError: If *payload* is neither text nor bytes.
    """
    cipher = resolve_cipher(alg)
    mac = resolve_mac(hash)
    iv_text = generate_iv() if not iv else _check_iv(iv, cipher_spec(cipher).iv_size)

    if isinstance(payload, str):
        data = payload.encode("utf-8")
    elif isinstance(payload, (bytes, bytearray, memoryview)):
        data = bytes(payload)
    else:
        raise TypeError(f"payload must be str or bytes, not {type(payload).__name__}")
    key = derive_key(secret)

    record = TokenRecord(
        alg=cipher.value,
        iv=iv_text,
        hash=mac.value,
        sig=sign(mac, data, key),
        payload=encrypt(cipher, data, key, iv_text.encode("ascii")),
    )
    return record.to_token()


def decode(token: str, secret: str | bytes) -> bytes:
    """Decrypt *token* and return its payload once the signature checks out.

    Raises:
        MalformedTokenError: If the framing or record structure is invalid.
        UnsupportedAlgorithmError: If the token names an unknown algorithm.
        AuthenticationFailure: If decryption or signature verification fails.
    """
    record = TokenRecord.from_token(token)
    cipher = resolve_cipher(record.alg)
    mac = resolve_mac(record.hash)
    key = derive_key(secret)

    try:
        iv = record.iv.encode("ascii")
    except UnicodeEncodeError as exc:
        raise MalformedTokenError() from exc

    try:
        plaintext = decrypt(cipher, record.payload, key, iv)
    except DecryptionError as exc:
        raise AuthenticationFailure() from exc

    if not verify(mac, plaintext, key, record.sig):
        raise AuthenticationFailure()
    return plaintext


def decode_text(token: str, secret: str | bytes, encoding: str = "utf-8") -> str:
    """Like :func:`decode` but return the payload as text."""
    payload = decode(token, secret)
    try:
        return payload.decode(encoding)
    except UnicodeDecodeError as exc:
        raise MalformedTokenError() from exc


def decode_or_none(token: str, secret: str | bytes) -> bytes | None:
    """Return the payload, or ``None`` if the token is rejected for any reason."""
    try:
        return decode(token, secret)
    except EWTError:
        return None


def _check_iv(iv: str | bytes, size: int) -> str:
    if isinstance(iv, bytes):
        try:
            iv = iv.decode("ascii")
        except UnicodeDecodeError as exc:
            raise InvalidIVError("IV must be ASCII") from exc
    if not iv.isascii():
        raise InvalidIVError("IV must be ASCII")
    if len(iv) != size:
        raise InvalidIVError(f"IV must be {size} bytes, got {len(iv)}")
    return iv


class EWTCodec:
    """Encodes and decodes EWTs with a configured secret and defaults.

    Rejections are logged with the exception class as ``reason``; secrets,
    keys and payloads never reach the log.
    """

    def __init__(self, settings: EWTSettings) -> None:
        secret = settings.EWT_SECRET
        if not secret or not secret.strip():
            raise ValueError("EWT_SECRET must be set to a non-empty value")
        self._secret = secret
        self._hash = resolve_mac(settings.EWT_HASH)
        self._alg = resolve_cipher(settings.EWT_CIPHER)
        self._header_name = settings.EWT_HEADER_NAME

    @property
    def header_name(self) -> str:
        """Conventional header that carries the token."""
        return self._header_name

    @property
    def hash(self) -> str:
        """Default MAC algorithm for :meth:`encode`."""
        return self._hash.value

    @property
    def alg(self) -> str:
        """Default cipher for :meth:`encode`."""
        return self._alg.value

    def encode(self, payload: str | bytes, iv: str | bytes | None = None) -> str:
        """Encode *payload* with the configured secret and algorithms."""
        return encode(payload, self._secret, hash=self._hash, alg=self._alg, iv=iv)

    def decode(self, token: str) -> bytes:
        """Decode *token*, logging and re-raising any rejection."""
        try:
            return decode(token, self._secret)
        except EWTError as exc:
            logger.warning("EWT rejected", extra={"reason": type(exc).__name__})
            raise

    def decode_text(self, token: str, encoding: str = "utf-8") -> str:
        """Decode *token* and return the payload as text."""
        try:
            return decode_text(token, self._secret, encoding=encoding)
        except EWTError as exc:
            logger.warning("EWT rejected", extra={"reason": type(exc).__name__})
            raise

    def decode_or_none(self, token: str) -> bytes | None:
        """Return the payload or ``None``; the reason is only logged."""
        try:
            return self.decode(token)
        except EWTError:
            return None
