from __future__ import annotations

import copy
import re
from collections.abc import Mapping, Sequence
from typing import Any

from botocore.exceptions import ClientError

from .model import Item

_CLAUSE_KEYWORD = re.compile(r"(?:^|(?<=\s))(SET|REMOVE)\s+")


def _validation_error(operation: str, message: str) -> ClientError:
    return ClientError({"Error": {"Code": "ValidationException", "Message": message}}, operation)


def _parse_update_expression(operation: str, expr: str) -> tuple[list[tuple[str, str]], list[str]]:
    text = expr.strip()
    matches = list(_CLAUSE_KEYWORD.finditer(text))
    if not matches or matches[0].start() != 0:
        raise _validation_error(operation, f"Invalid UpdateExpression: {expr!r}")

    sets: list[tuple[str, str]] = []
    removes: list[str] = []
    seen: set[str] = set()

    for i, match in enumerate(matches):
        keyword = match.group(1)
        if keyword in seen:
            raise _validation_error(operation, f"Invalid UpdateExpression: duplicate {keyword} clause")
        seen.add(keyword)

        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        body = text[match.end() : end].strip()
        if not body:
            raise _validation_error(operation, f"Invalid UpdateExpression: empty {keyword} clause")

        for part in (p.strip() for p in body.split(",")):
            if keyword == "REMOVE":
                removes.append(part)
                continue
            left, sep, right = part.partition("=")
            if not sep:
                raise _validation_error(operation, f"Invalid UpdateExpression: {part!r}")
            sets.append((left.strip(), right.strip()))

    return sets, removes


class FakeDynamoDBClient:
    """In-memory stand-in for the low-level DynamoDB client.

    Stores items by key and applies SET/REMOVE update expressions. Requests
    that DynamoDB would reject (an empty ``ExpressionAttributeValues``, an
    unresolved or unused placeholder, an update to a key attribute) raise
    ``ClientError`` with ``ValidationException``.
    """

    def __init__(self, *, key_names: Sequence[str] = ("pk",)) -> None:
        self._key_names = tuple(key_names)
        self._items: dict[tuple[Any, ...], Item] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def _key_of(self, operation: str, key: Mapping[str, Any]) -> tuple[Any, ...]:
        parts: list[Any] = []
        for name in self._key_names:
            attr = key.get(name)
            if not isinstance(attr, Mapping) or len(attr) != 1:
                raise _validation_error(operation, f"missing key attribute: {name}")
            ((tag, payload),) = attr.items()
            parts.append((tag, payload))
        return tuple(parts)

    def put_item(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("put_item", dict(kwargs)))
        item = kwargs["Item"]
        self._items[self._key_of("PutItem", item)] = copy.deepcopy(dict(item))
        return {}

    def get_item(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("get_item", dict(kwargs)))
        stored = self._items.get(self._key_of("GetItem", kwargs["Key"]))
        if stored is None:
            return {}
        return {"Item": copy.deepcopy(stored)}

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("scan", dict(kwargs)))
        items = [copy.deepcopy(item) for item in self._items.values()]
        return {"Items": items, "Count": len(items)}

    def update_item(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("update_item", dict(kwargs)))
        op = "UpdateItem"

        key = kwargs["Key"]
        names: Mapping[str, str] = kwargs.get("ExpressionAttributeNames") or {}
        if "ExpressionAttributeValues" in kwargs and not kwargs["ExpressionAttributeValues"]:
            raise _validation_error(op, "ExpressionAttributeValues must not be empty")
        values: Mapping[str, Any] = kwargs.get("ExpressionAttributeValues") or {}

        sets, removes = _parse_update_expression(op, kwargs["UpdateExpression"])

        used_names: set[str] = set()
        used_values: set[str] = set()

        def resolve_name(ref: str) -> str:
            if not ref.startswith("#"):
                return ref
            if ref not in names:
                raise _validation_error(op, f"undefined expression attribute name: {ref}")
            used_names.add(ref)
            return names[ref]

        def resolve_value(ref: str) -> Any:
            if ref not in values:
                raise _validation_error(op, f"undefined expression attribute value: {ref}")
            used_values.add(ref)
            return values[ref]

        resolved_sets = [(resolve_name(n), resolve_value(v)) for n, v in sets]
        resolved_removes = [resolve_name(n) for n in removes]

        unused_names = set(names) - used_names
        if unused_names:
            raise _validation_error(op, f"unused expression attribute names: {sorted(unused_names)}")
        unused_values = set(values) - used_values
        if unused_values:
            raise _validation_error(op, f"unused expression attribute values: {sorted(unused_values)}")

        for attr_name, _ in resolved_sets:
            if attr_name in self._key_names:
                raise _validation_error(op, f"cannot update key attribute: {attr_name}")
        for attr_name in resolved_removes:
            if attr_name in self._key_names:
                raise _validation_error(op, f"cannot update key attribute: {attr_name}")

        item_key = self._key_of(op, key)
        item = self._items.get(item_key)
        if item is None:
            item = {name: copy.deepcopy(key[name]) for name in self._key_names}

        for attr_name, attr in resolved_sets:
            item[attr_name] = copy.deepcopy(attr)
        for attr_name in resolved_removes:
            item.pop(attr_name, None)
        self._items[item_key] = item

        if kwargs.get("ReturnValues") == "ALL_NEW":
            return {"Attributes": copy.deepcopy(item)}
        return {}
