"""Container image resolution from the operator's environment."""
from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel

IMAGE_ENV = "IMAGE"
VERSION_ENV = "RELEASE_VERSION"
DEFAULT_IMAGE = "quay.io/openshift/origin-console"


def image_reference(base: str, version: Optional[str] = None) -> str:
    """Join an image name and tag, omitting the tag when it is empty."""

    if version:
        return f"{base}:{version}"
    return base


class ImageConfig(BaseModel):
    """Console image location, normally read from the process environment."""

    base: str = DEFAULT_IMAGE
    version: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ImageConfig":
        env = os.environ if environ is None else environ
        return cls(
            base=env.get(IMAGE_ENV) or DEFAULT_IMAGE,
            version=env.get(VERSION_ENV) or None,
        )

    def resolve(self) -> str:
        return image_reference(self.base, self.version)
