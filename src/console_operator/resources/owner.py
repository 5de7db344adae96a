"""Owner reference stamping so the cluster garbage-collects dependents."""
from __future__ import annotations

import copy
from typing import Dict, List, Optional

from .base import ResourceDefinition
from .console import Console


def owner_reference(owner: Console) -> Optional[Dict[str, object]]:
    """Return a controlling reference to ``owner``, or ``None`` without a uid.

    The API server rejects owner references that carry no uid.
    """

    if not owner.metadata.uid:
        return None
    return {
        "apiVersion": owner.api_version,
        "kind": owner.kind,
        "name": owner.name,
        "uid": owner.metadata.uid,
        "controller": True,
        "blockOwnerDeletion": True,
    }


def bind_owner(definition: ResourceDefinition, owner: Console) -> ResourceDefinition:
    """Return a copy of ``definition`` controlled by ``owner``.

    An existing reference to the same owner is replaced rather than duplicated.
    The input definition is left untouched. An owner that has not been stored
    yet has no uid, so nothing is stamped.
    """

    reference = owner_reference(owner)
    if reference is None:
        return definition
    metadata = copy.deepcopy(definition.metadata)
    existing: List[Dict[str, object]] = metadata.get("ownerReferences") or []
    references = [
        ref
        for ref in existing
        if ref.get("uid") != reference["uid"]
        and not (ref.get("kind") == reference["kind"] and ref.get("name") == reference["name"])
    ]
    references.append(reference)
    metadata["ownerReferences"] = references
    return definition.with_metadata(metadata)
