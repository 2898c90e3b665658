"""Centralized constants and algorithm allow-lists for EWT."""

import enum


class CipherAlgorithm(enum.StrEnum):
    """Symmetric ciphers a token may name in its ``a`` field.

    Values are the OpenSSL cipher names used on the wire.
    """

    AES_128_CTR = "aes-128-ctr"
    AES_192_CTR = "aes-192-ctr"
    AES_256_CTR = "aes-256-ctr"
    AES_128_CBC = "aes-128-cbc"
    AES_192_CBC = "aes-192-cbc"
    AES_256_CBC = "aes-256-cbc"
    AES_128_GCM = "aes-128-gcm"
    AES_192_GCM = "aes-192-gcm"
    AES_256_GCM = "aes-256-gcm"


class MacAlgorithm(enum.StrEnum):
    """HMAC digests a token may name in its ``h`` field."""

    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA3_256 = "sha3-256"
    SHA3_512 = "sha3-512"


# --- Defaults ---

DEFAULT_HASH = MacAlgorithm.SHA256
DEFAULT_CIPHER = CipherAlgorithm.AES_256_CTR
DEFAULT_HEADER_NAME = "X-EWT"  # Also seen in the wild: "X-EWToken"

# --- IV generation ---

IV_LENGTH = 16  # Characters of hex digest kept; their ASCII bytes are the IV
IV_SEED_BYTES = 32  # Random bytes hashed to produce an IV

# --- Wire format keys ---

FIELD_ALG = "a"
FIELD_IV = "i"
FIELD_HASH = "h"
FIELD_SIG = "s"
FIELD_PAYLOAD = "p"
