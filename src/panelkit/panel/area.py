"""
Area definition helpers.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

SEPARATOR = "-"


def normalize_area(area_id: str, area: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of an area definition with its defaults filled in.

    The id is always set from `area_id`; `label` and `link` default to the id
    and `menu` defaults to False.
    """
    normalized = dict(area)
    normalized["id"] = area_id
    normalized.setdefault("label", area_id)
    normalized.setdefault("menu", False)
    normalized.setdefault("link", area_id)
    return normalized


def resolve(value: Any, *args: Any) -> Any:
    """
    Evaluate a value that may be given either directly or as a callable.
    """
    if callable(value):
        return value(*args)
    return value
