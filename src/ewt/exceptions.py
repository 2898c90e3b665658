"""Domain exceptions for EWT encoding and decoding."""

GENERIC_REJECTION = "Invalid token"


class EWTError(Exception):
    """Base exception for EWT operations."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class UnsupportedAlgorithmError(EWTError):
    """A cipher or MAC name is not on the allow-list."""

    def __init__(self, kind: str, name: object) -> None:
        self.kind = kind
        super().__init__(f"Unsupported {kind} algorithm: {name!r}")


class InvalidIVError(EWTError, ValueError):
    """A caller-supplied IV does not fit the selected cipher."""


class TokenRejectedError(EWTError):
    """The token must not be trusted.

    Subclasses exist for internal diagnostics only. Their messages are
    identical so nothing about the reason leaks to whoever sees ``str(exc)``.
    """

    def __init__(self) -> None:
        super().__init__(GENERIC_REJECTION)


class MalformedTokenError(TokenRejectedError):
    """Framing, JSON structure, or a required field is broken."""


class AuthenticationFailure(TokenRejectedError):
    """Signature verification (or decryption) failed."""
