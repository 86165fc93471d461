"""
Module models — declared prebuilt modules and their module types.

A ModuleDecl is what the build file says ("this module exists, has this
type and these properties"). The live, hookable instance the host builds
from it is PrebuiltModule in core.engine.hooks.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Module names conventionally carry this prefix; artifact names do not.
PREBUILT_PREFIX = "prebuilt_"


class ModuleType(str, Enum):
    """Module types registered by this package."""

    LLVM_PREBUILT_LIBRARY_STATIC = "llvm_prebuilt_library_static"
    LIBCLANG_RT_PREBUILT_LIBRARY_SHARED = "libclang_rt_prebuilt_library_shared"
    LIBCLANG_RT_PREBUILT_LIBRARY_STATIC = "libclang_rt_prebuilt_library_static"


class HostKind(str, Enum):
    """Host library kinds the module types are built on."""

    PREBUILT_STATIC = "cc_prebuilt_library_static"
    PREBUILT_SHARED = "cc_prebuilt_library_shared"


class ModuleDecl(BaseModel):
    """A module declared in prebuilts.yml."""

    name: str
    type: str
    properties: dict[str, Any] = Field(default_factory=dict)

    @property
    def has_prebuilt_prefix(self) -> bool:
        return self.name.startswith(PREBUILT_PREFIX)


class VersionDefaults(BaseModel):
    """Per-file replacement for the built-in clang version defaults."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    prebuilts_version: str | None = None
    release_version: str | None = None


class BuildFile(BaseModel):
    """Root of prebuilts.yml — defaults, environment values, modules."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    defaults: VersionDefaults = Field(default_factory=VersionDefaults)
    env: dict[str, str] = Field(default_factory=dict)
    modules: list[ModuleDecl] = Field(default_factory=list)

    @field_validator("env", mode="before")
    @classmethod
    def _bools_as_strings(cls, value: Any) -> Any:
        # YAML reads true/yes/on as booleans; variables are strings.
        if isinstance(value, dict):
            return {
                k: str(v).lower() if isinstance(v, bool) else v for k, v in value.items()
            }
        return value

    def get_module(self, name: str) -> ModuleDecl | None:
        """Look up a module declaration by name."""
        for mod in self.modules:
            if mod.name == name:
                return mod
        return None

    def duplicate_names(self) -> list[str]:
        """Module names declared more than once, sorted."""
        names = [m.name for m in self.modules]
        return sorted({n for n in names if names.count(n) > 1})
