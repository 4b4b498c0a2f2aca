from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from boto3.dynamodb.types import DYNAMODB_CONTEXT, Binary

from .errors import UnknownAttributeError
from .model import ATTRIBUTE_TAGS

logger = logging.getLogger(__name__)


def parse_number(text: str, *, decimal_numbers: bool = False) -> Any:
    """Parse ``N`` text into an ``int``, a ``float`` or, on request, a ``Decimal``.

    Integral text becomes an ``int`` and keeps every digit. Anything else
    becomes a ``float``, so values beyond double precision lose digits. Pass
    ``decimal_numbers=True`` to get an exact ``Decimal`` built with the same
    context boto3 uses.
    """
    if decimal_numbers:
        return DYNAMODB_CONTEXT.create_decimal(text)
    try:
        return int(text)
    except ValueError:
        return float(text)


def _find_tag(attr: Any) -> str | None:
    if not isinstance(attr, Mapping):
        return None
    for tag in ATTRIBUTE_TAGS:
        if tag in attr:
            return tag
    return None


def from_attribute(attr: Any, *, decimal_numbers: bool = False) -> Any:
    tag = _find_tag(attr)
    if tag is None:
        logger.debug("no known tag in attribute value: %r", attr)
        raise UnknownAttributeError(attr)

    payload = attr[tag]
    match tag:
        case "S":
            return payload
        case "N":
            return parse_number(payload, decimal_numbers=decimal_numbers)
        case "BOOL":
            return bool(payload)
        case "NULL":
            return None
        case "L":
            return [from_attribute(v, decimal_numbers=decimal_numbers) for v in payload]
        case "M":
            return {k: from_attribute(v, decimal_numbers=decimal_numbers) for k, v in payload.items()}
        case "B":
            return payload.value if isinstance(payload, Binary) else payload
        case "SS":
            return list(payload)
        case "NS":
            return [parse_number(v, decimal_numbers=decimal_numbers) for v in payload]
    raise AssertionError(f"unhandled attribute tag: {tag}")  # pragma: no cover


def from_item(item: Mapping[str, Any], *, decimal_numbers: bool = False) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name, attr in item.items():
        try:
            out[name] = from_attribute(attr, decimal_numbers=decimal_numbers)
        except UnknownAttributeError as err:
            raise UnknownAttributeError(err.value, name=name) from err
    return out


def from_items(items: Iterable[Mapping[str, Any]], *, decimal_numbers: bool = False) -> list[dict[str, Any]]:
    return [from_item(item, decimal_numbers=decimal_numbers) for item in items]
