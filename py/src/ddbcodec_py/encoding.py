from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from .model import Attribute, Binary, Item, Number

logger = logging.getLogger(__name__)


def is_number(value: Any) -> bool:
    # bool is an int subclass but encodes as BOOL, never N.
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def render_number(value: Number) -> str:
    """Render a number as positional decimal text for an ``N`` payload.

    Integers keep every digit. Floats go through their shortest round-tripping
    ``repr`` and keep a fractional part, so ``3.0`` stays ``"3.0"`` and decodes
    back to a float. No output uses exponent notation.
    """
    if isinstance(value, int):
        return str(value)

    dec = Decimal(repr(value)) if isinstance(value, float) else value
    if not dec.is_finite():
        return str(dec)

    text = format(dec, "f")
    if isinstance(value, float) and "." not in text:
        text += ".0"
    return text


def _fallback_binary(value: Any) -> Binary:
    # Lossy: the payload is str(value), not a byte encoding of the object.
    logger.debug("encoding %s through the binary fallback", type(value).__name__)
    return {"B": str(value)}


def to_attribute(value: Any) -> Attribute:
    if isinstance(value, str):
        return {"S": value}
    if is_number(value):
        return {"N": render_number(value)}
    if isinstance(value, bool):
        return {"BOOL": value}
    if value is None:
        return {"NULL": True}
    if isinstance(value, (list, tuple)):
        return {"L": [to_attribute(v) for v in value]}
    if isinstance(value, Mapping):
        return {"M": {k: to_attribute(v) for k, v in value.items()}}
    return _fallback_binary(value)


def to_item(obj: Mapping[str, Any]) -> Item:
    return {key: to_attribute(value) for key, value in obj.items()}


def to_items(objs: Iterable[Mapping[str, Any]]) -> list[Item]:
    return [to_item(obj) for obj in objs]
