"""
Mock property sink — test double that records patches instead of merging.

Configurable to fail for specific modules, so callers can exercise the
"host merge failed" path without a broken property tree.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from clangprebuilts.adapters.base import PropertySink
from clangprebuilts.core.errors import PatchApplyError
from clangprebuilts.core.models.patch import ArtifactPatch

if TYPE_CHECKING:
    from clangprebuilts.core.engine.hooks import PrebuiltModule


class MockPropertySink(PropertySink):
    """Records every (module name, patch) it is asked to apply.

    Module properties are left untouched.
    """

    def __init__(self, sink_name: str = "mock"):
        self._name = sink_name
        self._failures: dict[str, str] = {}
        self._call_log: list[tuple[str, ArtifactPatch]] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[tuple[str, ArtifactPatch]]:
        """Every (module name, patch) received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times apply has been called."""
        return len(self._call_log)

    def patches_for(self, module_name: str) -> list[ArtifactPatch]:
        """Patches received for one module."""
        return [p for name, p in self._call_log if name == module_name]

    def set_failure(self, module_name: str, error: str = "Mock failure") -> None:
        """Configure apply to raise for a specific module."""
        self._failures[module_name] = error

    def reset(self) -> None:
        """Clear the call log and configured failures."""
        self._failures.clear()
        self._call_log.clear()

    def apply(self, module: PrebuiltModule, patch: ArtifactPatch) -> None:
        self._call_log.append((module.name, patch))
        if module.name in self._failures:
            raise PatchApplyError(self._failures[module.name])
