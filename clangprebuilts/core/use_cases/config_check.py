"""
Config check use case — validate prebuilts.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from clangprebuilts.adapters.registry import ModuleTypeRegistry, default_registry
from clangprebuilts.core.config.loader import ConfigError, find_build_file, load_build_file
from clangprebuilts.core.models.module import PREBUILT_PREFIX, BuildFile


@dataclass
class ConfigCheckResult:
    """Result of build file validation."""

    valid: bool = False
    build_file: BuildFile | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "module_count": len(self.build_file.modules) if self.build_file else 0,
        }


def check_config(
    config_path: Path | None = None,
    registry: ModuleTypeRegistry | None = None,
) -> ConfigCheckResult:
    """Validate the build file and report issues.

    Args:
        config_path: Optional explicit path to prebuilts.yml.
        registry: Module types considered known (default: the clang ones).
    """
    result = ConfigCheckResult()
    registry = registry or default_registry()

    if config_path is None:
        config_path = find_build_file()
    if config_path is None:
        result.errors.append("No prebuilts.yml found.")
        return result
    result.config_path = config_path

    try:
        build_file = load_build_file(config_path)
        result.build_file = build_file
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    if not build_file.modules:
        result.warnings.append("No modules defined. Nothing to resolve.")

    dupes = build_file.duplicate_names()
    if dupes:
        result.errors.append(f"Duplicate module names: {', '.join(dupes)}")

    for mod in build_file.modules:
        if mod.type not in registry:
            result.errors.append(f"Module '{mod.name}' has unknown type '{mod.type}'")
        if not mod.has_prebuilt_prefix:
            result.warnings.append(
                f"Module '{mod.name}' lacks the '{PREBUILT_PREFIX}' prefix."
            )

    result.valid = len(result.errors) == 0
    return result
