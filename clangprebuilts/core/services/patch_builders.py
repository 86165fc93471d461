"""
Property patch builders — one per module kind.

Each builder is a pure function of the resolved EnvConfig and the
module's identity, returning the patch its load hook hands to the host:

    build_static          llvm_prebuilt_library_static          per-arch .a
    build_shared          libclang_rt_prebuilt_library_shared   sanitizer .so
    build_static_runtime  libclang_rt_prebuilt_library_static   sanitizer .a
"""

from __future__ import annotations

import logging
from pathlib import Path

from clangprebuilts.core.config.environment import EnvConfig
from clangprebuilts.core.models.arch import Arch
from clangprebuilts.core.models.patch import (
    SharedRuntimePatch,
    StaticMultiArchPatch,
    StaticRuntimePatch,
)
from clangprebuilts.core.services.paths import (
    FUZZER_ARCHIVE,
    arch_artifact_path,
    artifact_filename,
    fuzzer_include_dir,
    runtime_artifact_path,
    same_directory,
)

logger = logging.getLogger(__name__)


def static_archives_enabled(prebuilts_base: str | None, module_dir: str | Path) -> bool:
    """Whether per-arch static archives may be used with this prebuilts base.

    These archives are pinned to the canonical clang base directory. They
    stay enabled only when no base override is set or the override is the
    module directory's parent.
    """
    if not prebuilts_base:
        return True
    return same_directory(prebuilts_base, Path(module_dir) / "..")


def build_static(
    env: EnvConfig,
    module_name: str,
    prebuilts_base: str | None,
    module_dir: str | Path,
) -> StaticMultiArchPatch:
    """Build the patch for a per-architecture static archive (libFuzzer, libomp)."""
    enabled = static_archives_enabled(prebuilts_base, module_dir)
    if not enabled:
        logger.info(
            "Disabling %s: prebuilts base %s is not the parent of %s",
            module_name, prebuilts_base, module_dir,
        )

    name = artifact_filename(module_name, "a")

    include_dirs: tuple[str, ...] = ()
    if name == FUZZER_ARCHIVE:
        include_dirs = (fuzzer_include_dir(env),)

    return StaticMultiArchPatch(
        enabled=enabled,
        export_include_dirs=include_dirs,
        target={arch: (arch_artifact_path(env, arch, name),) for arch in Arch},
    )


def build_shared(
    env: EnvConfig,
    module_name: str,
    force_build: bool,
) -> SharedRuntimePatch | None:
    """Build the patch for a sanitizer shared runtime.

    Returns None when the runtime is built from source instead.
    """
    if force_build:
        logger.info("%s is built from source, no prebuilt patch", module_name)
        return None

    name = artifact_filename(module_name, "so", leading_only=False)
    return SharedRuntimePatch(srcs=(runtime_artifact_path(env, name),))


def build_static_runtime(env: EnvConfig, module_name: str) -> StaticRuntimePatch:
    """Build the patch for a sanitizer static runtime."""
    name = artifact_filename(module_name, "a", leading_only=False)
    return StaticRuntimePatch(srcs=(runtime_artifact_path(env, name),))
