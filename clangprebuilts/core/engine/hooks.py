"""
Load hooks — the two-phase configure/apply protocol.

A module factory builds a bare PrebuiltModule and registers one or more
load hooks on it. Later, once the environment is known, the host calls
run_load_hooks():

    configure   hook(ctx) -> patch | None      pure, no side effects
    apply       sink.apply(module, patch)      exactly once per patch

Hooks never touch the module's properties themselves; only the sink does.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from clangprebuilts.adapters.base import PropertySink
from clangprebuilts.core.config.environment import BuildEnv, EnvConfig, EnvDefaults, resolve_env
from clangprebuilts.core.models.module import HostKind
from clangprebuilts.core.models.patch import ArtifactPatch

logger = logging.getLogger(__name__)


@dataclass
class PrebuiltModule:
    """A live module instance hosted on a prebuilt library kind."""

    name: str
    module_type: str
    host_kind: HostKind
    module_dir: Path = field(default_factory=Path)
    properties: dict[str, Any] = field(default_factory=dict)
    load_hooks: list[LoadHook] = field(default_factory=list)
    applied: list[ArtifactPatch] = field(default_factory=list)

    def add_load_hook(self, hook: LoadHook) -> None:
        """Register a hook to run when the host loads this module."""
        self.load_hooks.append(hook)


@dataclass
class LoadHookContext:
    """What a load hook may read: the module's identity and the environment."""

    module: PrebuiltModule
    env: BuildEnv
    defaults: EnvDefaults = field(default_factory=EnvDefaults)

    @property
    def module_name(self) -> str:
        return self.module.name

    @property
    def module_dir(self) -> Path:
        return self.module.module_dir

    def resolve_env(self) -> EnvConfig:
        """Resolve clang versions for this invocation."""
        return resolve_env(self.env.getenv, self.defaults)


LoadHook = Callable[[LoadHookContext], "ArtifactPatch | None"]


def run_load_hooks(
    module: PrebuiltModule,
    env: BuildEnv,
    sink: PropertySink,
    defaults: EnvDefaults | None = None,
) -> list[ArtifactPatch]:
    """Run every load hook of a module and apply the patches they return.

    Raises:
        PatchApplyError: If the sink fails to merge a patch.
    """
    ctx = LoadHookContext(module=module, env=env, defaults=defaults or EnvDefaults())
    patches: list[ArtifactPatch] = []

    for hook in module.load_hooks:
        patch = hook(ctx)
        if patch is None:
            logger.debug(
                "Hook %s produced no patch for %s",
                getattr(hook, "__name__", repr(hook)), module.name,
            )
            continue
        sink.apply(module, patch)
        module.applied.append(patch)
        patches.append(patch)

    logger.debug("Module %s: %d patch(es) applied", module.name, len(patches))
    return patches
