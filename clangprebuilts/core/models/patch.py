"""
Property patch models — what a load hook asks the host to merge.

One variant per module kind, all sharing the ArtifactPatch base and
tagged by ``kind``. Patches are frozen: built fresh per hook invocation,
handed to the property sink once, then discarded.

Each variant renders itself in the host's property vocabulary via
``to_properties()``, which is what the sink actually merges.
"""

from __future__ import annotations

from abc import abstractmethod
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from clangprebuilts.core.models.arch import Arch


class PatchKind(str, Enum):
    """Discriminator of the patch variants."""

    STATIC_MULTI_ARCH = "static_multi_arch"
    SHARED_RUNTIME = "shared_runtime"
    STATIC_RUNTIME = "static_runtime"


class ArtifactPatch(BaseModel):
    """Common base of every property patch."""

    model_config = ConfigDict(frozen=True)

    kind: str

    @abstractmethod
    def to_properties(self) -> dict[str, Any]:
        """Render the patch as a nested property mapping."""

    @property
    @abstractmethod
    def sources(self) -> list[str]:
        """Every artifact path the patch declares."""


class StaticMultiArchPatch(ArtifactPatch):
    """Static archive with one source per target architecture (libFuzzer, libomp)."""

    kind: Literal["static_multi_arch"] = PatchKind.STATIC_MULTI_ARCH.value
    enabled: bool = True
    export_include_dirs: tuple[str, ...] = ()
    target: dict[Arch, tuple[str, ...]]

    @model_validator(mode="after")
    def _every_arch_present(self) -> StaticMultiArchPatch:
        missing = [a.value for a in Arch if a not in self.target]
        if missing:
            raise ValueError(f"target is missing architectures: {', '.join(missing)}")
        return self

    @property
    def sources(self) -> list[str]:
        return [src for arch in Arch for src in self.target[arch]]

    def to_properties(self) -> dict[str, Any]:
        props: dict[str, Any] = {"enabled": self.enabled}
        if self.export_include_dirs:
            props["export_include_dirs"] = list(self.export_include_dirs)
        props["target"] = {
            arch.target_key: {"srcs": list(self.target[arch])} for arch in Arch
        }
        return props


class SharedRuntimePatch(ArtifactPatch):
    """Sanitizer shared runtime (libclang_rt.*.so).

    The flag fields are literal-typed: a shared runtime patch that
    instruments, strips, packs relocations or links an STL cannot be built.
    """

    kind: Literal["shared_runtime"] = PatchKind.SHARED_RUNTIME.value
    srcs: tuple[str, ...]
    system_shared_libs: tuple[str, ...] = ()
    sanitize_never: Literal[True] = True
    strip_none: Literal[True] = True
    pack_relocations: Literal[False] = False
    stl: Literal["none"] = "none"

    @model_validator(mode="after")
    def _no_system_libs(self) -> SharedRuntimePatch:
        if self.system_shared_libs:
            raise ValueError("system_shared_libs must stay empty for a sanitizer runtime")
        return self

    @property
    def sources(self) -> list[str]:
        return list(self.srcs)

    def to_properties(self) -> dict[str, Any]:
        return {
            "srcs": list(self.srcs),
            "system_shared_libs": [],
            "sanitize": {"never": self.sanitize_never},
            "strip": {"none": self.strip_none},
            "pack_relocations": self.pack_relocations,
            "stl": self.stl,
        }


class StaticRuntimePatch(ArtifactPatch):
    """Sanitizer static runtime (libclang_rt.*.a); inherits host policy."""

    kind: Literal["static_runtime"] = PatchKind.STATIC_RUNTIME.value
    srcs: tuple[str, ...]

    @property
    def sources(self) -> list[str]:
        return list(self.srcs)

    def to_properties(self) -> dict[str, Any]:
        return {"srcs": list(self.srcs)}


ModulePropertyPatch = Annotated[
    Union[StaticMultiArchPatch, SharedRuntimePatch, StaticRuntimePatch],
    Field(discriminator="kind"),
]
