"""
Module type registry — maps module type names to factories.

The registry is the single point where module types become known to the
host. A build file's ``type:`` is looked up here and the matching factory
builds the module instance with its load hooks registered.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from clangprebuilts.core.errors import UnknownModuleTypeError

if TYPE_CHECKING:
    from clangprebuilts.core.engine.hooks import PrebuiltModule

logger = logging.getLogger(__name__)

ModuleFactory = Callable[..., "PrebuiltModule"]


class ModuleTypeRegistry:
    """Central registry of module type factories.

    Features:
        - Register/unregister factories by module type name
        - Look up a factory, or build a module straight from a declaration
        - List what is registered
    """

    def __init__(self) -> None:
        self._factories: dict[str, ModuleFactory] = {}

    def register(self, module_type: str, factory: ModuleFactory) -> None:
        """Register a factory for a module type name.

        Registering a name twice replaces the earlier factory.
        """
        if module_type in self._factories:
            logger.warning("Overwriting existing module type: %s", module_type)
        self._factories[module_type] = factory
        logger.debug("Registered module type: %s", module_type)

    def unregister(self, module_type: str) -> None:
        """Remove a module type from the registry."""
        self._factories.pop(module_type, None)

    def get(self, module_type: str) -> ModuleFactory | None:
        """Look up a factory by module type name."""
        return self._factories.get(module_type)

    def list_module_types(self) -> list[str]:
        """List all registered module type names."""
        return list(self._factories.keys())

    def __contains__(self, module_type: object) -> bool:
        return module_type in self._factories

    def create(
        self,
        module_type: str,
        name: str,
        module_dir: Path | None = None,
        properties: dict[str, Any] | None = None,
    ) -> PrebuiltModule:
        """Build a module instance of the given type.

        Raises:
            UnknownModuleTypeError: If no factory is registered for the type.
        """
        factory = self._factories.get(module_type)
        if factory is None:
            raise UnknownModuleTypeError(module_type, self.list_module_types())
        return factory(name, module_dir=module_dir, properties=properties)


def default_registry() -> ModuleTypeRegistry:
    """A registry with the clang prebuilt module types registered."""
    from clangprebuilts.core.engine.module_types import MODULE_FACTORIES

    registry = ModuleTypeRegistry()
    for module_type, factory in MODULE_FACTORIES.items():
        registry.register(module_type.value, factory)
    return registry
