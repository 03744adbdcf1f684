"""Domain models and the wire decoder for the dogs collection."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import IntEnum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError

DECODE_ERROR_DOMAIN = "dogpatch.decode"


class Dog(BaseModel):
    """A dog listing as served by the DogPatch API (value object)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: UUID
    seller_id: UUID = Field(validation_alias="sellerID")
    about: str
    birthday: datetime
    breed: str
    breeder_rating: float = Field(validation_alias="breederRating")
    cost: Decimal
    created: datetime
    image_url: HttpUrl = Field(validation_alias="imageURL")
    name: str


class DecodeErrorCode(IntEnum):
    DATA_CORRUPTED = 1
    KEY_NOT_FOUND = 2
    TYPE_MISMATCH = 3
    VALUE_NOT_FOUND = 4


class DecodeError(Exception):
    """Payload bytes could not be decoded into the dogs collection.

    domain and code are stable; compare them instead of the message.
    """

    domain = DECODE_ERROR_DOMAIN

    def __init__(
        self,
        code: DecodeErrorCode,
        message: str,
        *,
        path: tuple[Any, ...] = (),
    ) -> None:
        super().__init__(message)
        self.code = code
        self.path = path

    def __repr__(self) -> str:
        return f"DecodeError(domain={self.domain!r}, code={self.code.name}, path={self.path!r})"


_DOGS_ADAPTER: TypeAdapter[list[Dog]] = TypeAdapter(list[Dog])


def _code_for(error: dict[str, Any]) -> DecodeErrorCode:
    kind = error.get("type", "")
    if kind in ("json_invalid", "json_type"):
        return DecodeErrorCode.DATA_CORRUPTED
    if kind == "missing":
        return DecodeErrorCode.KEY_NOT_FOUND
    if error.get("input", ...) is None:
        return DecodeErrorCode.VALUE_NOT_FOUND
    return DecodeErrorCode.TYPE_MISMATCH


def decode_dogs(data: bytes) -> list[Dog]:
    """Decode a JSON array of dog objects. Raises DecodeError on malformed input."""
    try:
        return _DOGS_ADAPTER.validate_json(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        path = tuple(first.get("loc", ()))
        raise DecodeError(
            _code_for(first),
            f"{first.get('msg', 'invalid payload')} at {list(path)}",
            path=path,
        ) from exc
