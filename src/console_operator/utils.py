"""Utility helpers shared across the console operator package."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


def get_path(body: Mapping[str, Any], *keys: str) -> Optional[Any]:
    """Walk nested mappings, returning ``None`` as soon as a key is missing."""

    current: Any = body
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def resource_version(body: Mapping[str, Any]) -> str:
    """Return ``metadata.resourceVersion`` of an object, or an empty string."""

    return get_path(body, "metadata", "resourceVersion") or ""


def pod_template_annotations(body: Dict[str, Any]) -> Optional[Dict[str, str]]:
    return get_path(body, "spec", "template", "metadata", "annotations")
