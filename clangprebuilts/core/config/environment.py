"""
Environment resolution — clang versions and prebuilt directories.

Two variables pick which clang prebuilts a build uses:

    LLVM_PREBUILTS_VERSION   directory of the prebuilt toolchain
    LLVM_RELEASE_VERSION     short release version inside lib64/clang/

Each falls back to a built-in default when unset or empty. Two more
variables steer individual module kinds:

    LLVM_PREBUILTS_BASE                   relocated prebuilts base directory
    FORCE_BUILD_SANITIZER_SHARED_OBJECTS  build sanitizer .so from source

BuildEnv records every variable it is asked for, so a caller can report
which variables a configuration depends on.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

# ── Variable names ──────────────────────────────────────────────

LLVM_PREBUILTS_VERSION = "LLVM_PREBUILTS_VERSION"
LLVM_RELEASE_VERSION = "LLVM_RELEASE_VERSION"
LLVM_PREBUILTS_BASE = "LLVM_PREBUILTS_BASE"
FORCE_BUILD_SANITIZER_SHARED_OBJECTS = "FORCE_BUILD_SANITIZER_SHARED_OBJECTS"

# ── Built-in defaults ───────────────────────────────────────────

CLANG_DEFAULT_VERSION = "clang-r383902b1"
CLANG_DEFAULT_SHORT_VERSION = "11.0.2"

_TRUE_VALUES = frozenset({"1", "y", "yes", "on", "true"})


class BuildEnv:
    """Read-only view of the build environment that records lookups.

    Unset variables read as the empty string, so "unset" and "empty"
    are indistinguishable to every caller.
    """

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ: dict[str, str] = dict(environ or {})
        self._accessed: dict[str, str] = {}

    def getenv(self, name: str) -> str:
        """Return the variable's value, or "" when unset."""
        value = self._environ.get(name, "")
        self._accessed[name] = value
        return value

    def is_env_true(self, name: str) -> bool:
        """Whether the variable is set to a truthy value (1, y, yes, on, true)."""
        return self.getenv(name).strip().lower() in _TRUE_VALUES

    @property
    def accessed(self) -> dict[str, str]:
        """Every variable read so far, with the value that was seen."""
        return dict(self._accessed)


@dataclass(frozen=True)
class EnvDefaults:
    """Fallback values used when a version variable is unset."""

    prebuilts_version: str = CLANG_DEFAULT_VERSION
    release_version: str = CLANG_DEFAULT_SHORT_VERSION


class EnvConfig(BaseModel):
    """Resolved clang versions for one hook invocation."""

    model_config = ConfigDict(frozen=True)

    prebuilts_version: str
    release_version: str

    @property
    def prebuilt_dir(self) -> str:
        """Base directory of the prebuilt toolchain, relative to the module."""
        return posixpath.join("./", self.prebuilts_version)

    @property
    def resource_dir(self) -> str:
        """Directory holding the clang runtime libraries."""
        return posixpath.join(
            self.prebuilt_dir, "lib64", "clang", self.release_version, "lib", "linux"
        )


def resolve_env(
    getenv: Callable[[str], str | None],
    defaults: EnvDefaults | None = None,
) -> EnvConfig:
    """Resolve the two version variables against their defaults.

    Any non-empty value is taken verbatim; there is no format check.

    Args:
        getenv: Lookup returning the variable's value, or None/"" if unset.
        defaults: Fallback values (default: the built-in clang versions).
    """
    defaults = defaults or EnvDefaults()
    prebuilts_version = getenv(LLVM_PREBUILTS_VERSION)
    release_version = getenv(LLVM_RELEASE_VERSION)
    if not prebuilts_version:
        logger.debug("%s unset, using %s", LLVM_PREBUILTS_VERSION, defaults.prebuilts_version)
    if not release_version:
        logger.debug("%s unset, using %s", LLVM_RELEASE_VERSION, defaults.release_version)
    return EnvConfig(
        prebuilts_version=prebuilts_version or defaults.prebuilts_version,
        release_version=release_version or defaults.release_version,
    )
