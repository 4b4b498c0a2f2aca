from __future__ import annotations

import json
import re
from importlib.resources import files

from .decoding import from_attribute, from_item, from_items, parse_number
from .encoding import render_number, to_attribute, to_item, to_items
from .errors import DdbCodecError, HintShapeMismatchError, UnknownAttributeError, ValidationError
from .hints import to_item_with_hints
from .model import ATTRIBUTE_TAGS, Attribute, Hint, Item, UpdateExpressionParams
from .patch import build_patch


def _read_repo_version() -> str:
    try:
        data = json.loads(files(__package__).joinpath("version.json").read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return "0.0.0"

    version = data.get("version")
    return version if isinstance(version, str) and version else "0.0.0"


def _normalize_repo_version(repo_version: str) -> str:
    match = re.match(r"^(\d+\.\d+\.\d+)-rc\.?([0-9]+)$", repo_version)
    if match:
        return f"{match.group(1)}rc{match.group(2)}"
    return repo_version


__repo_version__ = _read_repo_version()
__version__ = _normalize_repo_version(__repo_version__)


__all__ = [
    "ATTRIBUTE_TAGS",
    "Attribute",
    "build_patch",
    "DdbCodecError",
    "from_attribute",
    "from_item",
    "from_items",
    "Hint",
    "HintShapeMismatchError",
    "Item",
    "parse_number",
    "render_number",
    "to_attribute",
    "to_item",
    "to_item_with_hints",
    "to_items",
    "UnknownAttributeError",
    "UpdateExpressionParams",
    "ValidationError",
    "__repo_version__",
    "__version__",
]
