"""
Environment info use case — show what the environment resolves to.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from clangprebuilts.core.config.environment import (
    FORCE_BUILD_SANITIZER_SHARED_OBJECTS,
    LLVM_PREBUILTS_BASE,
    EnvConfig,
    EnvDefaults,
    resolve_env,
)
from clangprebuilts.core.config.loader import (
    build_env,
    env_defaults,
    find_build_file,
    load_build_file,
)
from clangprebuilts.core.errors import ConfigError


@dataclass
class EnvInfoResult:
    """Resolved environment, as the load hooks would see it."""

    env: EnvConfig | None = None
    defaults: EnvDefaults = field(default_factory=EnvDefaults)
    prebuilts_base: str = ""
    force_build_shared: bool = False
    config_path: Path | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error or self.env is None:
            return {"error": self.error}
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "prebuilts_version": self.env.prebuilts_version,
            "release_version": self.env.release_version,
            "prebuilt_dir": self.env.prebuilt_dir,
            "resource_dir": self.env.resource_dir,
            "defaults": {
                "prebuilts_version": self.defaults.prebuilts_version,
                "release_version": self.defaults.release_version,
            },
            "prebuilts_base": self.prebuilts_base or None,
            "force_build_shared": self.force_build_shared,
        }


def get_env_info(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, str] | None = None,
) -> EnvInfoResult:
    """Resolve the environment, using the build file when one is found.

    A missing build file is not an error here: built-in defaults apply.
    An explicit but invalid one is.
    """
    result = EnvInfoResult()

    build_file = None
    try:
        if config_path is None:
            config_path = find_build_file()
        if config_path is not None:
            build_file = load_build_file(config_path)
            result.config_path = config_path
            result.defaults = env_defaults(build_file)
    except ConfigError as e:
        result.error = str(e)
        return result

    env = build_env(build_file, environ=environ, overrides=overrides)
    result.env = resolve_env(env.getenv, result.defaults)
    result.prebuilts_base = env.getenv(LLVM_PREBUILTS_BASE)
    result.force_build_shared = env.is_env_true(FORCE_BUILD_SANITIZER_SHARED_OBJECTS)
    return result
