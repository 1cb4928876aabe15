"""Pydantic models for image submissions."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ImageSubmission(BaseModel):
    """A local upload handed to `save` by the host.

    The file at `path` is owned by the host; the adapter only reads it.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    path: str = Field(..., min_length=1, description="Local path of the uploaded file")
    name: str = Field(..., min_length=1, description="Original filename")

    @classmethod
    def from_host(cls, image: Any) -> "ImageSubmission":
        """Accept either a mapping or an object exposing `path` and `name`."""
        if isinstance(image, Mapping):
            return cls.model_validate(dict(image))
        return cls(path=getattr(image, "path", None), name=getattr(image, "name", None))


def submission_path(image: Any) -> str | None:
    """Best-effort path lookup for error messages."""
    if isinstance(image, Mapping):
        return image.get("path")
    return getattr(image, "path", None)
