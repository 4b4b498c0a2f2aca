from __future__ import annotations

from typing import Any


class DdbCodecError(Exception):
    pass


class ValidationError(DdbCodecError):
    pass


class UnknownAttributeError(DdbCodecError):
    def __init__(self, value: Any, *, name: str | None = None) -> None:
        where = f" for {name!r}" if name is not None else ""
        super().__init__(f"unknown DynamoDB attribute{where}: {value!r}")
        self.value = value
        self.name = name


class HintShapeMismatchError(DdbCodecError):
    def __init__(self, *, name: str, hint: str, value: Any, detail: str) -> None:
        super().__init__(f"hint {hint} does not fit {name!r}: {detail}")
        self.name = name
        self.hint = hint
        self.value = value
