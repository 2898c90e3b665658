"""Cipher and MAC primitives behind closed allow-lists.

Algorithm names arrive as untrusted data inside a token. They are only
ever resolved through :class:`CipherAlgorithm` and :class:`MacAlgorithm`;
anything else is rejected, so there is no way to name "no encryption".
"""

import base64
import binascii
import enum
import hashlib
import hmac
from dataclasses import dataclass

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ewt.constants import CipherAlgorithm, MacAlgorithm
from ewt.exceptions import UnsupportedAlgorithmError

AES_BLOCK_BITS = 128
GCM_TAG_BYTES = 16


class CipherMode(enum.StrEnum):
    """Block cipher modes of operation."""

    CTR = "ctr"
    CBC = "cbc"
    GCM = "gcm"


@dataclass(frozen=True, slots=True)
class CipherSpec:
    """Key size, IV size and mode for one allowed cipher."""

    key_size: int
    iv_size: int
    mode: CipherMode


CIPHER_SPECS: dict[CipherAlgorithm, CipherSpec] = {
    CipherAlgorithm.AES_128_CTR: CipherSpec(16, 16, CipherMode.CTR),
    CipherAlgorithm.AES_192_CTR: CipherSpec(24, 16, CipherMode.CTR),
    CipherAlgorithm.AES_256_CTR: CipherSpec(32, 16, CipherMode.CTR),
    CipherAlgorithm.AES_128_CBC: CipherSpec(16, 16, CipherMode.CBC),
    CipherAlgorithm.AES_192_CBC: CipherSpec(24, 16, CipherMode.CBC),
    CipherAlgorithm.AES_256_CBC: CipherSpec(32, 16, CipherMode.CBC),
    CipherAlgorithm.AES_128_GCM: CipherSpec(16, 16, CipherMode.GCM),
    CipherAlgorithm.AES_192_GCM: CipherSpec(24, 16, CipherMode.GCM),
    CipherAlgorithm.AES_256_GCM: CipherSpec(32, 16, CipherMode.GCM),
}

# hashlib constructor names for each allowed MAC
_MAC_DIGESTS: dict[MacAlgorithm, str] = {
    MacAlgorithm.SHA224: "sha224",
    MacAlgorithm.SHA256: "sha256",
    MacAlgorithm.SHA384: "sha384",
    MacAlgorithm.SHA512: "sha512",
    MacAlgorithm.SHA3_256: "sha3_256",
    MacAlgorithm.SHA3_512: "sha3_512",
}


class DecryptionError(Exception):
    """Ciphertext could not be decrypted (bad encoding, padding or tag)."""


def resolve_cipher(name: object) -> CipherAlgorithm:
    """Map a cipher name to its allow-list entry, case-insensitively."""
    if isinstance(name, CipherAlgorithm):
        return name
    if isinstance(name, str):
        try:
            return CipherAlgorithm(name.lower())
        except ValueError:
            pass
    raise UnsupportedAlgorithmError("cipher", name)


def resolve_mac(name: object) -> MacAlgorithm:
    """Map a MAC name to its allow-list entry, case-insensitively."""
    if isinstance(name, MacAlgorithm):
        return name
    if isinstance(name, str):
        try:
            return MacAlgorithm(name.lower())
        except ValueError:
            pass
    raise UnsupportedAlgorithmError("MAC", name)


def cipher_spec(cipher: CipherAlgorithm) -> CipherSpec:
    """Return the parameters for an allowed cipher."""
    return CIPHER_SPECS[cipher]


def encrypt(cipher: CipherAlgorithm, plaintext: bytes, key: bytes, iv: bytes) -> str:
    """Encrypt *plaintext* and return the ciphertext as standard base64.

    *key* is truncated to the cipher's key size. *iv* must already have the
    cipher's IV size.
    """
    spec = cipher_spec(cipher)
    key = key[: spec.key_size]
    if spec.mode is CipherMode.GCM:
        ciphertext = AESGCM(key).encrypt(iv, plaintext, None)
    else:
        if spec.mode is CipherMode.CBC:
            padder = padding.PKCS7(AES_BLOCK_BITS).padder()
            plaintext = padder.update(plaintext) + padder.finalize()
        encryptor = Cipher(algorithms.AES(key), _block_mode(spec.mode, iv)).encryptor()
        ciphertext = encryptor.update(plaintext) + encryptor.finalize()
    return base64.b64encode(ciphertext).decode("ascii")


def decrypt(cipher: CipherAlgorithm, ciphertext_b64: str, key: bytes, iv: bytes) -> bytes:
    """Reverse :func:`encrypt`.

    Raises:
        DecryptionError: For any failure; callers must not tell these apart
            from a signature mismatch.
    """
    spec = cipher_spec(cipher)
    key = key[: spec.key_size]
    if len(iv) != spec.iv_size:
        raise DecryptionError("IV length does not match cipher")
    try:
        ciphertext = base64.b64decode(ciphertext_b64.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise DecryptionError("Ciphertext is not valid base64") from exc

    if spec.mode is CipherMode.GCM:
        if len(ciphertext) < GCM_TAG_BYTES:
            raise DecryptionError("Ciphertext shorter than GCM tag")
        try:
            return AESGCM(key).decrypt(iv, ciphertext, None)
        except InvalidTag as exc:
            raise DecryptionError("GCM tag mismatch") from exc

    decryptor = Cipher(algorithms.AES(key), _block_mode(spec.mode, iv)).decryptor()
    try:
        plaintext = decryptor.update(ciphertext) + decryptor.finalize()
    except ValueError as exc:
        raise DecryptionError("Ciphertext length invalid for mode") from exc
    if spec.mode is CipherMode.CBC:
        unpadder = padding.PKCS7(AES_BLOCK_BITS).unpadder()
        try:
            plaintext = unpadder.update(plaintext) + unpadder.finalize()
        except ValueError as exc:
            raise DecryptionError("Bad padding") from exc
    return plaintext


def sign(mac: MacAlgorithm, data: bytes, key: bytes) -> str:
    """Return the lowercase hex HMAC of *data*."""
    return hmac.new(key, data, _MAC_DIGESTS[mac]).hexdigest()


def verify(mac: MacAlgorithm, data: bytes, key: bytes, signature: str) -> bool:
    """Check *signature* against the HMAC of *data* in constant time.

    Hex case is ignored. A signature with non-ASCII characters never matches.
    """
    expected = sign(mac, data, key).encode("ascii")
    try:
        candidate = signature.lower().encode("ascii")
    except UnicodeEncodeError:
        return False
    return hmac.compare_digest(expected, candidate)


def _block_mode(mode: CipherMode, iv: bytes) -> modes.Mode:
    if mode is CipherMode.CTR:
        return modes.CTR(iv)
    return modes.CBC(iv)
