"""
Shared test fixtures and configuration.
"""

import logging
import textwrap
from pathlib import Path

import pytest

from clangprebuilts.core.config.environment import (
    FORCE_BUILD_SANITIZER_SHARED_OBJECTS,
    LLVM_PREBUILTS_BASE,
    LLVM_PREBUILTS_VERSION,
    LLVM_RELEASE_VERSION,
    EnvConfig,
)

_BUILD_ENV_VARS = (
    LLVM_PREBUILTS_VERSION,
    LLVM_RELEASE_VERSION,
    LLVM_PREBUILTS_BASE,
    FORCE_BUILD_SANITIZER_SHARED_OBJECTS,
    "CLANGPREBUILTS_LOG_LEVEL",
    "CLANGPREBUILTS_LOG_FILE",
    "CLANGPREBUILTS_LOG_FILE_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_build_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own build environment out of every test."""
    for name in _BUILD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handlers installed by setup_logging or the CLI."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def env_11() -> EnvConfig:
    """The 11.0.1 / 11.0.1 version pair used by the path examples."""
    return EnvConfig(prebuilts_version="11.0.1", release_version="11.0.1")


@pytest.fixture
def build_file(tmp_path: Path) -> Path:
    """A prebuilts.yml declaring one module of each type."""
    module_dir = tmp_path / "prebuilts" / "clang" / "host" / "linux-x86"
    module_dir.mkdir(parents=True)
    path = module_dir / "prebuilts.yml"
    path.write_text(textwrap.dedent("""\
        defaults:
          prebuilts_version: "11.0.1"
          release_version: "11.0.1"
        modules:
          - name: prebuilt_libFuzzer
            type: llvm_prebuilt_library_static
          - name: prebuilt_libomp
            type: llvm_prebuilt_library_static
          - name: prebuilt_libclang_rt.asan-aarch64-android
            type: libclang_rt_prebuilt_library_shared
            properties:
              shared_libs: [libdl]
          - name: prebuilt_libclang_rt.ubsan_standalone-aarch64-android
            type: libclang_rt_prebuilt_library_static
    """))
    return path
