from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .encoding import to_attribute
from .model import Attribute, UpdateExpressionParams

logger = logging.getLogger(__name__)


def build_patch(obj: Mapping[str, Any]) -> UpdateExpressionParams:
    """Turn a sparse changes mapping into ``update_item`` parameters.

    Each top-level key ``k`` is referenced as ``#k`` and, when it carries a
    value, ``:k``. ``None`` values REMOVE the attribute; everything else is
    SET to its encoded form. Nested lists and maps replace the stored value
    whole; nothing is merged.

    ``ExpressionAttributeValues`` is left out when there is nothing to SET,
    because DynamoDB rejects an empty values map. An empty changes mapping
    yields an empty expression and an empty names map.
    """
    names: dict[str, str] = {}
    values: dict[str, Attribute] = {}
    set_parts: list[str] = []
    remove_parts: list[str] = []

    for key, value in obj.items():
        name_ref = f"#{key}"
        names[name_ref] = key

        if value is None:
            remove_parts.append(name_ref)
            continue

        value_ref = f":{key}"
        values[value_ref] = to_attribute(value)
        set_parts.append(f"{name_ref} = {value_ref}")

    expr_parts: list[str] = []
    if set_parts:
        expr_parts.append("SET " + ", ".join(set_parts))
    if remove_parts:
        expr_parts.append("REMOVE " + ", ".join(remove_parts))

    logger.debug("built patch: %d set, %d remove", len(set_parts), len(remove_parts))

    params: UpdateExpressionParams = {
        "UpdateExpression": " ".join(expr_parts),
        "ExpressionAttributeNames": names,
    }
    if values:
        params["ExpressionAttributeValues"] = values
    return params
