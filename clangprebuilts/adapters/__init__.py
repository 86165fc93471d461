"""Adapters — the host-side seams around the core.

Public re-exports for convenient access.
"""

from clangprebuilts.adapters.base import PropertySink
from clangprebuilts.adapters.memory import InMemoryPropertySink, append_properties
from clangprebuilts.adapters.mock import MockPropertySink
from clangprebuilts.adapters.registry import ModuleTypeRegistry, default_registry

__all__ = [
    "InMemoryPropertySink",
    "MockPropertySink",
    "ModuleTypeRegistry",
    "PropertySink",
    "append_properties",
    "default_registry",
]
