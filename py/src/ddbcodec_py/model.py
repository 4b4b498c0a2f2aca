from __future__ import annotations

from decimal import Decimal
from enum import StrEnum
from typing import Literal, NotRequired, TypedDict


class Str(TypedDict):
    S: str


class Num(TypedDict):
    N: str


class Bool(TypedDict):
    BOOL: bool


class Null(TypedDict):
    NULL: Literal[True]


class List(TypedDict):
    L: list[Attribute]


class Map(TypedDict):
    M: dict[str, Attribute]


class Binary(TypedDict):
    B: str | bytes


class StringSet(TypedDict):
    SS: list[str]


class NumberSet(TypedDict):
    NS: list[str]


# Exactly one key per attribute; the key is the tag.
Attribute = Str | Num | Bool | Null | List | Map | Binary | StringSet | NumberSet

Item = dict[str, Attribute]

# Decode order. The first tag present in an attribute decides how it is read.
ATTRIBUTE_TAGS: tuple[str, ...] = ("S", "N", "BOOL", "NULL", "L", "M", "B", "SS", "NS")

Number = int | float | Decimal


class Hint(StrEnum):
    AS_STRING_SET = "SS"
    AS_NUMBER_SET = "NS"


class UpdateExpressionParams(TypedDict):
    UpdateExpression: str
    ExpressionAttributeNames: dict[str, str]
    ExpressionAttributeValues: NotRequired[dict[str, Attribute]]
