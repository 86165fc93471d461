"""
Property sink base — the contract between load hooks and the host.

A sink merges a finished property patch into a module's configuration.
The core never edits module properties itself; it only hands patches
to a sink, once per patch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from clangprebuilts.core.models.patch import ArtifactPatch

if TYPE_CHECKING:
    from clangprebuilts.core.engine.hooks import PrebuiltModule


class PropertySink(ABC):
    """Abstract base class for patch appliers.

    To create a new sink:
        1. Subclass PropertySink
        2. Implement name and apply
        3. Pass it to run_load_hooks() or run_resolve()
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The sink identifier (e.g., 'memory', 'mock')."""

    @abstractmethod
    def apply(self, module: PrebuiltModule, patch: ArtifactPatch) -> None:
        """Merge ``patch`` into ``module``'s properties.

        Raises:
            PatchApplyError: If the patch cannot be merged. Not retried.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
