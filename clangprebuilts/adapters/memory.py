"""
In-memory property sink — merges patches into a module's property tree.

Merge rules, applied recursively:

    mapping + mapping   merged key by key
    list + list         concatenated (declared entries first)
    scalar + scalar     patch value replaces the declared one
    absent + anything   patch value copied in

Merging a mapping or list into a value of another shape is an error.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any

from clangprebuilts.adapters.base import PropertySink
from clangprebuilts.core.errors import PatchApplyError
from clangprebuilts.core.models.patch import ArtifactPatch

if TYPE_CHECKING:
    from clangprebuilts.core.engine.hooks import PrebuiltModule

logger = logging.getLogger(__name__)


def append_properties(
    dst: dict[str, Any],
    src: dict[str, Any],
    _path: str = "",
) -> dict[str, Any]:
    """Return ``dst`` with ``src`` appended; neither input is modified.

    Raises:
        PatchApplyError: On a shape mismatch between the two trees.
    """
    merged = copy.deepcopy(dst)

    for key, value in src.items():
        where = f"{_path}.{key}" if _path else key

        if key not in merged:
            merged[key] = copy.deepcopy(value)
            continue

        current = merged[key]
        if isinstance(current, dict) or isinstance(value, dict):
            if not (isinstance(current, dict) and isinstance(value, dict)):
                raise PatchApplyError(
                    f"Property '{where}': cannot merge "
                    f"{type(value).__name__} into {type(current).__name__}"
                )
            merged[key] = append_properties(current, value, where)
        elif isinstance(current, list) or isinstance(value, list):
            if not (isinstance(current, list) and isinstance(value, list)):
                raise PatchApplyError(
                    f"Property '{where}': cannot merge "
                    f"{type(value).__name__} into {type(current).__name__}"
                )
            merged[key] = current + copy.deepcopy(value)
        else:
            merged[key] = value

    return merged


class InMemoryPropertySink(PropertySink):
    """Applies patches straight onto ``module.properties``."""

    @property
    def name(self) -> str:
        return "memory"

    def apply(self, module: PrebuiltModule, patch: ArtifactPatch) -> None:
        module.properties = append_properties(module.properties, patch.to_properties())
        logger.debug("Applied %s patch to %s", patch.kind, module.name)
