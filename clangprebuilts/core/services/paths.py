"""
Path helpers — artifact names and directory comparison.

Pure functions; the only filesystem access is path canonicalisation.
"""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path

from clangprebuilts.core.config.environment import EnvConfig
from clangprebuilts.core.models.arch import Arch, subdir_for
from clangprebuilts.core.models.module import PREBUILT_PREFIX

logger = logging.getLogger(__name__)

# Only this archive ships headers alongside it.
FUZZER_ARCHIVE = "libFuzzer.a"


def artifact_filename(module_name: str, ext: str, *, leading_only: bool = True) -> str:
    """Derive an artifact file name from a module name.

    With ``leading_only`` the ``prebuilt_`` prefix is stripped only when the
    name starts with it; otherwise its first occurrence anywhere is removed.
    """
    if leading_only:
        base = module_name.removeprefix(PREBUILT_PREFIX)
    else:
        base = module_name.replace(PREBUILT_PREFIX, "", 1)
    return f"{base}.{ext}"


def arch_artifact_path(env: EnvConfig, arch: Arch | str, filename: str) -> str:
    """Path of an artifact in one architecture's subdirectory."""
    return posixpath.join(env.resource_dir, subdir_for(arch), filename)


def runtime_artifact_path(env: EnvConfig, filename: str) -> str:
    """Path of an architecture-homogeneous runtime artifact."""
    return posixpath.join(env.resource_dir, filename)


def fuzzer_include_dir(env: EnvConfig) -> str:
    """Header directory exported alongside libFuzzer."""
    return posixpath.join(env.prebuilt_dir, "prebuilt_include", "llvm", "lib", "Fuzzer")


def _canonical(path: str | Path) -> Path:
    return Path(path).resolve()


def same_directory(a: str | Path, b: str | Path) -> bool:
    """Whether two paths name the same directory once canonicalised.

    Symlinks are followed and relative paths resolve against the working
    directory. A path that cannot be canonicalised compares as different.
    """
    try:
        return _canonical(a) == _canonical(b)
    except (OSError, RuntimeError, ValueError) as e:
        logger.warning("Cannot canonicalise %s or %s: %s", a, b, e)
        return False
