"""
Module types — factories and load hooks for the three clang prebuilt kinds.

    llvm_prebuilt_library_static         libFuzzer, libomp (one .a per arch)
    libclang_rt_prebuilt_library_shared  sanitizer runtimes (.so)
    libclang_rt_prebuilt_library_static  sanitizer runtimes (.a)

Each factory returns a bare module with its load hook registered; the
hook reads the environment and delegates to a patch builder.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

from clangprebuilts.core.config.environment import (
    FORCE_BUILD_SANITIZER_SHARED_OBJECTS,
    LLVM_PREBUILTS_BASE,
)
from clangprebuilts.core.engine.hooks import LoadHookContext, PrebuiltModule
from clangprebuilts.core.models.module import HostKind, ModuleType
from clangprebuilts.core.models.patch import (
    SharedRuntimePatch,
    StaticMultiArchPatch,
    StaticRuntimePatch,
)
from clangprebuilts.core.services.patch_builders import (
    build_shared,
    build_static,
    build_static_runtime,
)

logger = logging.getLogger(__name__)

# ── Load hooks ──────────────────────────────────────────────────


def llvm_prebuilt_library_static(ctx: LoadHookContext) -> StaticMultiArchPatch:
    return build_static(
        ctx.resolve_env(),
        ctx.module_name,
        ctx.env.getenv(LLVM_PREBUILTS_BASE),
        ctx.module_dir,
    )


def libclang_rt_prebuilt_library_shared(ctx: LoadHookContext) -> SharedRuntimePatch | None:
    # Checked first: when forced, the versions are not consulted at all.
    if ctx.env.is_env_true(FORCE_BUILD_SANITIZER_SHARED_OBJECTS):
        logger.info("%s is built from source, no prebuilt patch", ctx.module_name)
        return None
    return build_shared(ctx.resolve_env(), ctx.module_name, force_build=False)


def libclang_rt_prebuilt_library_static(ctx: LoadHookContext) -> StaticRuntimePatch:
    return build_static_runtime(ctx.resolve_env(), ctx.module_name)


# ── Factories ───────────────────────────────────────────────────


def _new_module(
    name: str,
    module_type: ModuleType,
    host_kind: HostKind,
    module_dir: Path | None,
    properties: dict[str, Any] | None,
) -> PrebuiltModule:
    return PrebuiltModule(
        name=name,
        module_type=module_type.value,
        host_kind=host_kind,
        module_dir=module_dir or Path("."),
        properties=copy.deepcopy(properties or {}),
    )


def llvm_prebuilt_library_static_factory(
    name: str,
    module_dir: Path | None = None,
    properties: dict[str, Any] | None = None,
) -> PrebuiltModule:
    module = _new_module(
        name, ModuleType.LLVM_PREBUILT_LIBRARY_STATIC, HostKind.PREBUILT_STATIC,
        module_dir, properties,
    )
    module.add_load_hook(llvm_prebuilt_library_static)
    return module


def libclang_rt_prebuilt_library_shared_factory(
    name: str,
    module_dir: Path | None = None,
    properties: dict[str, Any] | None = None,
) -> PrebuiltModule:
    module = _new_module(
        name, ModuleType.LIBCLANG_RT_PREBUILT_LIBRARY_SHARED, HostKind.PREBUILT_SHARED,
        module_dir, properties,
    )
    module.add_load_hook(libclang_rt_prebuilt_library_shared)
    return module


def libclang_rt_prebuilt_library_static_factory(
    name: str,
    module_dir: Path | None = None,
    properties: dict[str, Any] | None = None,
) -> PrebuiltModule:
    module = _new_module(
        name, ModuleType.LIBCLANG_RT_PREBUILT_LIBRARY_STATIC, HostKind.PREBUILT_STATIC,
        module_dir, properties,
    )
    module.add_load_hook(libclang_rt_prebuilt_library_static)
    return module


MODULE_FACTORIES = {
    ModuleType.LLVM_PREBUILT_LIBRARY_STATIC: llvm_prebuilt_library_static_factory,
    ModuleType.LIBCLANG_RT_PREBUILT_LIBRARY_SHARED: libclang_rt_prebuilt_library_shared_factory,
    ModuleType.LIBCLANG_RT_PREBUILT_LIBRARY_STATIC: libclang_rt_prebuilt_library_static_factory,
}
