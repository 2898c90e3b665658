"""Token record model and its canonical JSON document."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ewt.base64url import base64url_decode, base64url_encode
from ewt.constants import FIELD_ALG, FIELD_HASH, FIELD_IV, FIELD_PAYLOAD, FIELD_SIG
from ewt.exceptions import MalformedTokenError


class TokenRecord(BaseModel):
    """The five fields carried by every EWT.

    Field order matches the wire order ``a, i, h, s, p``. Values are kept
    as text exactly as they travel; interpretation happens in the codec.
    """

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True, extra="ignore")

    alg: str = Field(alias=FIELD_ALG)
    iv: str = Field(alias=FIELD_IV)
    hash: str = Field(alias=FIELD_HASH)
    sig: str = Field(alias=FIELD_SIG)
    payload: str = Field(alias=FIELD_PAYLOAD)

    def to_document(self) -> str:
        """Serialize to compact JSON with ``/`` escaped as ``\\/``.

        The escaping mirrors the serializer other EWT producers use, so the
        same inputs yield the same bytes everywhere.
        """
        document = json.dumps(self.model_dump(by_alias=True), separators=(",", ":"), ensure_ascii=True)
        return document.replace("/", "\\/")

    def to_token(self) -> str:
        """Serialize and apply URL-safe base64 framing."""
        return base64url_encode(self.to_document().encode("ascii"))

    @classmethod
    def from_document(cls, document: str | bytes) -> "TokenRecord":
        """Parse a JSON document, raising MalformedTokenError on any defect."""
        try:
            data: Any = json.loads(document)
        except (ValueError, RecursionError) as exc:
            raise MalformedTokenError() from exc
        if not isinstance(data, dict):
            raise MalformedTokenError()
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise MalformedTokenError() from exc

    @classmethod
    def from_token(cls, token: str) -> "TokenRecord":
        """Remove the framing from *token* and parse the record inside."""
        if not isinstance(token, str) or not token:
            raise MalformedTokenError()
        try:
            document = base64url_decode(token)
        except ValueError as exc:
            raise MalformedTokenError() from exc
        return cls.from_document(document)
