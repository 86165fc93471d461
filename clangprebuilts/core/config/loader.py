"""
Configuration loader — reads prebuilts.yml into domain models.

This is the primary entry point for loading the build file. It reads
YAML, validates against pydantic schemas, and returns typed domain
objects.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from clangprebuilts.core.config.environment import BuildEnv, EnvDefaults
from clangprebuilts.core.errors import ConfigError
from clangprebuilts.core.models.module import BuildFile

logger = logging.getLogger(__name__)

# Default build filename
BUILD_FILE = "prebuilts.yml"

__all__ = [
    "BUILD_FILE",
    "ConfigError",
    "build_env",
    "env_defaults",
    "find_build_file",
    "load_build_file",
    "parse_env_overrides",
]


def find_build_file(start_dir: Path | None = None) -> Path | None:
    """Search for prebuilts.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to prebuilts.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / BUILD_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_build_file(path: Path | None = None) -> BuildFile:
    """Load and validate the build file.

    Args:
        path: Explicit path to prebuilts.yml. If None, searches upward.

    Returns:
        Validated BuildFile model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_build_file()

    if path is None:
        raise ConfigError(f"No {BUILD_FILE} found. Specify one with --config.")

    if not path.is_file():
        raise ConfigError(f"Build file not found: {path}")

    logger.debug("Loading build file from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        build_file = BuildFile.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid build file: {e}") from e

    logger.info("Loaded %s with %d modules", path.name, len(build_file.modules))
    return build_file


def env_defaults(build_file: BuildFile) -> EnvDefaults:
    """Version defaults: the file's ``defaults:`` over the built-in ones."""
    builtin = EnvDefaults()
    return EnvDefaults(
        prebuilts_version=build_file.defaults.prebuilts_version or builtin.prebuilts_version,
        release_version=build_file.defaults.release_version or builtin.release_version,
    )


def parse_env_overrides(pairs: list[str] | tuple[str, ...]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings from the command line.

    Raises:
        ConfigError: If an entry has no ``=`` or an empty key.
    """
    overrides: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"Invalid environment override {pair!r}, expected KEY=VALUE")
        overrides[key.strip()] = value
    return overrides


def build_env(
    build_file: BuildFile | None = None,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, str] | None = None,
) -> BuildEnv:
    """Layer the environment: overrides > process environment > build file.

    Args:
        build_file: Supplies the lowest-precedence ``env:`` values.
        environ: Process environment (default: ``os.environ``).
        overrides: Explicit values, e.g. from ``--env KEY=VALUE``.
    """
    merged: dict[str, str] = {}
    if build_file is not None:
        merged.update(build_file.env)
    merged.update(os.environ if environ is None else environ)
    merged.update(overrides or {})
    return BuildEnv(merged)
