"""Structural comparison of project descriptors."""

from dataclasses import fields
from typing import List, Optional

from ..schemas.models import ProjectDescriptor


def specs_equal(cached: Optional[ProjectDescriptor], current: Optional[ProjectDescriptor]) -> bool:
    """True when both descriptors exist and are equal field by field, nested data included."""
    if cached is None or current is None:
        return False
    return cached == current


def describe_differences(cached: Optional[ProjectDescriptor], current: ProjectDescriptor) -> List[str]:
    """Names of the top-level fields that changed, for logging."""
    if cached is None:
        return ["added"]
    return [
        f.name for f in fields(ProjectDescriptor)
        if getattr(cached, f.name) != getattr(current, f.name)
    ]
