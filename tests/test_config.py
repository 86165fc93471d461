"""
Tests for build file loading — prebuilts.yml parsing, validation, env layering.
"""

import textwrap
from pathlib import Path

import pytest

from clangprebuilts.core.config.environment import CLANG_DEFAULT_VERSION, EnvDefaults
from clangprebuilts.core.config.loader import (
    ConfigError,
    build_env,
    env_defaults,
    find_build_file,
    load_build_file,
    parse_env_overrides,
)
from clangprebuilts.core.models.module import BuildFile


class TestLoadBuildFile:
    """Tests for load_build_file()."""

    def test_load_valid(self, build_file: Path):
        bf = load_build_file(build_file)
        assert len(bf.modules) == 4
        assert bf.defaults.release_version == "11.0.1"
        asan = bf.get_module("prebuilt_libclang_rt.asan-aarch64-android")
        assert asan is not None
        assert asan.type == "libclang_rt_prebuilt_library_shared"
        assert asan.properties == {"shared_libs": ["libdl"]}

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "prebuilts.yml"
        path.write_text("")
        assert load_build_file(path).modules == []

    def test_env_section(self, tmp_path: Path):
        path = tmp_path / "prebuilts.yml"
        path.write_text(textwrap.dedent("""\
            env:
              LLVM_RELEASE_VERSION: "12.0.1"
              FORCE_BUILD_SANITIZER_SHARED_OBJECTS: "true"
        """))
        bf = load_build_file(path)
        assert bf.env["LLVM_RELEASE_VERSION"] == "12.0.1"

    def test_env_section_unquoted_booleans(self, tmp_path: Path):
        path = tmp_path / "prebuilts.yml"
        path.write_text(textwrap.dedent("""\
            env:
              FORCE_BUILD_SANITIZER_SHARED_OBJECTS: yes
              LLVM_PREBUILTS_BASE: "/opt/clang"
              OTHER_FLAG: false
        """))
        bf = load_build_file(path)
        assert bf.env["FORCE_BUILD_SANITIZER_SHARED_OBJECTS"] == "true"
        assert bf.env["OTHER_FLAG"] == "false"
        assert build_env(bf, environ={}).is_env_true("FORCE_BUILD_SANITIZER_SHARED_OBJECTS")

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_build_file(tmp_path / "nonexistent.yml")

    def test_invalid_yaml_raises(self, tmp_path: Path):
        path = tmp_path / "prebuilts.yml"
        path.write_text(":: invalid: yaml: [")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_build_file(path)

    def test_non_mapping_raises(self, tmp_path: Path):
        path = tmp_path / "prebuilts.yml"
        path.write_text("- just\n- a\n- list\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_build_file(path)

    def test_module_without_type_raises(self, tmp_path: Path):
        path = tmp_path / "prebuilts.yml"
        path.write_text("modules:\n  - name: prebuilt_libomp\n")
        with pytest.raises(ConfigError, match="Invalid build file"):
            load_build_file(path)

    def test_auto_search_none_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        isolated = tmp_path / "isolated"
        isolated.mkdir()
        monkeypatch.chdir(isolated)
        with pytest.raises(ConfigError, match=r"No prebuilts\.yml found"):
            load_build_file(None)


class TestFindBuildFile:
    """Tests for find_build_file()."""

    def test_find_in_current_dir(self, tmp_path: Path):
        (tmp_path / "prebuilts.yml").write_text("modules: []\n")
        result = find_build_file(tmp_path)
        assert result is not None
        assert result.name == "prebuilts.yml"

    def test_find_in_parent_dir(self, tmp_path: Path):
        (tmp_path / "prebuilts.yml").write_text("modules: []\n")
        subdir = tmp_path / "lib64" / "clang"
        subdir.mkdir(parents=True)
        result = find_build_file(subdir)
        assert result is not None
        assert result.parent == tmp_path.resolve()

    def test_not_found_returns_none(self, tmp_path: Path):
        subdir = tmp_path / "deep" / "nested"
        subdir.mkdir(parents=True)
        assert find_build_file(subdir) is None


class TestEnvDefaults:
    def test_builtin_when_file_silent(self):
        assert env_defaults(BuildFile()) == EnvDefaults()

    def test_partial_override(self):
        bf = BuildFile.model_validate({"defaults": {"release_version": "12.0.5"}})
        defaults = env_defaults(bf)
        assert defaults.release_version == "12.0.5"
        assert defaults.prebuilts_version == CLANG_DEFAULT_VERSION


class TestBuildEnvLayering:
    def test_precedence(self):
        bf = BuildFile(env={"A": "file", "B": "file", "C": "file"})
        env = build_env(bf, environ={"B": "process", "C": "process"}, overrides={"C": "cli"})
        assert env.getenv("A") == "file"
        assert env.getenv("B") == "process"
        assert env.getenv("C") == "cli"

    def test_process_environment_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LLVM_RELEASE_VERSION", "13.0.0")
        assert build_env().getenv("LLVM_RELEASE_VERSION") == "13.0.0"


class TestParseEnvOverrides:
    def test_pairs(self):
        assert parse_env_overrides(["A=1", "B=x=y", "C="]) == {"A": "1", "B": "x=y", "C": ""}

    @pytest.mark.parametrize("bad", ["NOEQUALS", "=value", " =v"])
    def test_invalid(self, bad: str):
        with pytest.raises(ConfigError, match="KEY=VALUE"):
            parse_env_overrides([bad])
