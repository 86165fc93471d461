"""
Resolve use case — run every module's load hooks for a build file.

Ties together build file loading, environment layering, the module type
registry, and the property sink.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from clangprebuilts.adapters.base import PropertySink
from clangprebuilts.adapters.memory import InMemoryPropertySink
from clangprebuilts.adapters.registry import ModuleTypeRegistry, default_registry
from clangprebuilts.core.config.loader import (
    build_env,
    env_defaults,
    find_build_file,
    load_build_file,
)
from clangprebuilts.core.engine.hooks import PrebuiltModule, run_load_hooks
from clangprebuilts.core.errors import ClangPrebuiltsError
from clangprebuilts.core.models.patch import ArtifactPatch

logger = logging.getLogger(__name__)


@dataclass
class ModuleResolution:
    """Outcome of loading one module."""

    name: str
    module_type: str
    host_kind: str
    patches: list[ArtifactPatch] = field(default_factory=list)
    properties: dict[str, Any] = field(default_factory=dict)

    @property
    def patched(self) -> bool:
        return bool(self.patches)

    @classmethod
    def from_module(cls, module: PrebuiltModule) -> ModuleResolution:
        return cls(
            name=module.name,
            module_type=module.module_type,
            host_kind=module.host_kind.value,
            patches=list(module.applied),
            properties=module.properties,
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.module_type,
            "host_kind": self.host_kind,
            "patches": [p.model_dump(mode="json") for p in self.patches],
            "properties": self.properties,
        }


@dataclass
class ResolveResult:
    """Result of the resolve use case."""

    modules: list[ModuleResolution] = field(default_factory=list)
    config_path: Path | None = None
    env_deps: dict[str, str] = field(default_factory=dict)
    error: str | None = None

    @property
    def patched_count(self) -> int:
        return sum(1 for m in self.modules if m.patched)

    def get_module(self, name: str) -> ModuleResolution | None:
        for m in self.modules:
            if m.name == name:
                return m
        return None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "modules": [m.to_dict() for m in self.modules],
            "env_deps": self.env_deps,
        }


def run_resolve(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, str] | None = None,
    module_names: list[str] | None = None,
    registry: ModuleTypeRegistry | None = None,
    sink: PropertySink | None = None,
) -> ResolveResult:
    """Load the build file and resolve every (or the selected) module.

    Args:
        config_path: Optional explicit path to prebuilts.yml.
        environ: Process environment (default: ``os.environ``).
        overrides: Highest-precedence environment values.
        module_names: Restrict to these modules (default: all).
        registry: Module types (default: the clang prebuilt types).
        sink: Patch applier (default: in-memory merge).

    Returns:
        ResolveResult; ``error`` is set if anything failed.
    """
    result = ResolveResult()
    registry = registry or default_registry()
    sink = sink or InMemoryPropertySink()

    try:
        if config_path is None:
            config_path = find_build_file()
        build_file = load_build_file(config_path)
        assert config_path is not None  # load_build_file raised otherwise
        result.config_path = config_path

        env = build_env(build_file, environ=environ, overrides=overrides)
        defaults = env_defaults(build_file)
        module_dir = config_path.parent.resolve()

        dupes = build_file.duplicate_names()
        if dupes:
            result.error = f"Duplicate module names: {', '.join(dupes)}"
            return result

        decls = build_file.modules
        if module_names:
            missing = [n for n in module_names if build_file.get_module(n) is None]
            if missing:
                result.error = f"Unknown module(s): {', '.join(missing)}"
                return result
            decls = [d for d in decls if d.name in module_names]

        for decl in decls:
            module = registry.create(
                decl.type, decl.name, module_dir=module_dir, properties=decl.properties
            )
            run_load_hooks(module, env, sink, defaults)
            result.modules.append(ModuleResolution.from_module(module))

        result.env_deps = env.accessed

    except ClangPrebuiltsError as e:
        # Surfaced through result.error.
        logger.info("Resolve failed: %s", e)
        result.error = str(e)
        return result

    logger.info(
        "Resolved %d module(s), %d patched", len(result.modules), result.patched_count
    )
    return result
