# expo_push/serializer.py

import json
from typing import Any, Iterable

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from expo_push.errors import PushEmptyError, PushSerializationError


def _to_wire(item: Any) -> Any:
    # tryb python: NaN/inf zostają floatami i odpada na allow_nan=False
    if isinstance(item, BaseModel):
        return item.model_dump(mode="python", by_alias=True, exclude_none=True)
    return item


def _dump_item(item: Any) -> bytes:
    try:
        return json.dumps(
            _to_wire(item),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
            default=to_jsonable_python,
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise PushSerializationError(f"Cannot encode {type(item).__name__}: {e}") from e


def serialize_json_list(items: Iterable[Any], prefix: bytes = b"", suffix: bytes = b"") -> bytes:
    """
    Składa tablicę JSON bajt po bajcie, bez listy pośrednich stringów:
    prefix + '[' + item(,item)* + ']' + suffix.

    Pusta sekwencja -> PushEmptyError, zanim cokolwiek zostanie zapisane.
    """
    it = iter(items)
    try:
        first = next(it)
    except StopIteration:
        raise PushEmptyError() from None

    buffer = bytearray(prefix)
    buffer += b"["
    buffer += _dump_item(first)
    for item in it:
        buffer += b","
        buffer += _dump_item(item)
    buffer += b"]"
    buffer += suffix
    return bytes(buffer)


def serialize_receipt_ids(receipt_ids: Iterable[str]) -> bytes:
    # {"ids":[...]}
    return serialize_json_list(receipt_ids, prefix=b'{"ids":', suffix=b"}")
