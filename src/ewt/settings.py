"""EWT settings loaded from environment variables."""

import functools

from pydantic_settings import BaseSettings

from ewt.constants import DEFAULT_CIPHER, DEFAULT_HASH, DEFAULT_HEADER_NAME


class EWTSettings(BaseSettings):
    """Configuration for :class:`ewt.codec.EWTCodec`."""

    EWT_SECRET: str = ""
    EWT_HASH: str = DEFAULT_HASH.value
    EWT_CIPHER: str = DEFAULT_CIPHER.value
    EWT_HEADER_NAME: str = DEFAULT_HEADER_NAME

    # Logging
    EWT_LOG_LEVEL: str = "INFO"

    model_config = {"env_prefix": ""}


@functools.lru_cache(maxsize=1)
def get_settings() -> EWTSettings:
    """Return cached settings singleton."""
    return EWTSettings()
