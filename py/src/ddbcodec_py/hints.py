from __future__ import annotations

from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

from .encoding import is_number, render_number, to_attribute
from .errors import HintShapeMismatchError, ValidationError
from .model import Attribute, Hint, Item

_SET_CONTAINERS = (list, tuple, set, frozenset)


def _normalize_hints(hints: Mapping[str, Hint | str]) -> dict[str, Hint]:
    out: dict[str, Hint] = {}
    for name, hint in hints.items():
        try:
            out[name] = Hint(hint)
        except ValueError as err:
            raise ValidationError(f"unsupported hint for {name!r}: {hint!r}") from err
    return out


def _require_collection(name: str, hint: Hint, value: Any) -> list[Any]:
    if not isinstance(value, _SET_CONTAINERS):
        raise HintShapeMismatchError(
            name=name,
            hint=hint,
            value=value,
            detail=f"expected a list, tuple or set, got {type(value).__name__}",
        )
    return list(value)


def _string_set(name: str, value: Any) -> Attribute:
    elems = _require_collection(name, Hint.AS_STRING_SET, value)
    for elem in elems:
        if not isinstance(elem, str):
            raise HintShapeMismatchError(
                name=name,
                hint=Hint.AS_STRING_SET,
                value=value,
                detail=f"element {elem!r} is not a string",
            )
    return {"SS": list(dict.fromkeys(elems))}


def _number_set(name: str, value: Any) -> Attribute:
    elems = _require_collection(name, Hint.AS_NUMBER_SET, value)
    for elem in elems:
        if not is_number(elem):
            raise HintShapeMismatchError(
                name=name,
                hint=Hint.AS_NUMBER_SET,
                value=value,
                detail=f"element {elem!r} is not a number",
            )
    # Numerically equal elements are duplicates: 1, 1.0 and Decimal("1.00") keep "1".
    rendered: dict[Decimal, str] = {}
    for elem in elems:
        text = render_number(elem)
        rendered.setdefault(Decimal(text), text)
    return {"NS": list(rendered.values())}


def to_item_with_hints(hints: Mapping[str, Hint | str]) -> Callable[[Mapping[str, Any]], Item]:
    """Bind a hint map and return an encoder for whole items.

    Hinted top-level keys become ``SS``/``NS`` attributes instead of lists.
    Duplicate elements are dropped, first occurrence wins; numbers count as
    duplicates when numerically equal. An empty collection stays an empty
    set. Keys without a hint, and everything nested below the top level, use
    :func:`to_attribute`.

    The hint map is copied when bound.
    """
    bound = _normalize_hints(hints)

    def encode(obj: Mapping[str, Any]) -> Item:
        item: Item = {}
        for name, value in obj.items():
            hint = bound.get(name)
            if hint is None:
                item[name] = to_attribute(value)
            elif hint is Hint.AS_STRING_SET:
                item[name] = _string_set(name, value)
            else:
                item[name] = _number_set(name, value)
        return item

    return encode
