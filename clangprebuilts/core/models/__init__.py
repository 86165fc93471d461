"""
Domain models — pydantic types for clang prebuilt resolution.

All models are re-exported here for convenient access:

    from clangprebuilts.core.models import Arch, StaticMultiArchPatch, ModuleDecl
"""

from clangprebuilts.core.models.arch import ARCH_SUBDIRS, Arch, subdir_for
from clangprebuilts.core.models.module import (
    PREBUILT_PREFIX,
    BuildFile,
    HostKind,
    ModuleDecl,
    ModuleType,
    VersionDefaults,
)
from clangprebuilts.core.models.patch import (
    ArtifactPatch,
    ModulePropertyPatch,
    PatchKind,
    SharedRuntimePatch,
    StaticMultiArchPatch,
    StaticRuntimePatch,
)

__all__ = [
    # arch.py
    "ARCH_SUBDIRS",
    "Arch",
    # patch.py
    "ArtifactPatch",
    # module.py
    "BuildFile",
    "HostKind",
    "ModuleDecl",
    "ModulePropertyPatch",
    "ModuleType",
    "PREBUILT_PREFIX",
    "PatchKind",
    "SharedRuntimePatch",
    "StaticMultiArchPatch",
    "StaticRuntimePatch",
    "VersionDefaults",
    "subdir_for",
]
