"""
Tests for domain models — patch variants, tagged union, build file.
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from clangprebuilts.core.models import (
    Arch,
    ArtifactPatch,
    BuildFile,
    ModuleDecl,
    ModulePropertyPatch,
    SharedRuntimePatch,
    StaticMultiArchPatch,
    StaticRuntimePatch,
)


def _all_arch_target(name: str = "libomp.a") -> dict:
    return {arch: (f"lib/{arch.value}/{name}",) for arch in Arch}


class TestStaticMultiArchPatch:
    def test_requires_every_arch(self):
        target = _all_arch_target()
        del target[Arch.MIPS64]
        with pytest.raises(ValidationError, match="mips64"):
            StaticMultiArchPatch(target=target)

    def test_to_properties(self):
        patch = StaticMultiArchPatch(
            enabled=False,
            export_include_dirs=("inc",),
            target=_all_arch_target(),
        )
        props = patch.to_properties()
        assert props["enabled"] is False
        assert props["export_include_dirs"] == ["inc"]
        assert list(props["target"]) == [
            "android_arm",
            "android_arm64",
            "android_mips",
            "android_mips64",
            "android_x86",
            "android_x86_64",
        ]
        assert props["target"]["android_arm64"] == {"srcs": ["lib/arm64/libomp.a"]}

    def test_sources_in_arch_order(self):
        patch = StaticMultiArchPatch(target=_all_arch_target())
        assert patch.sources[0] == "lib/arm/libomp.a"
        assert patch.sources[-1] == "lib/x86_64/libomp.a"
        assert len(patch.sources) == 6

    def test_frozen(self):
        patch = StaticMultiArchPatch(target=_all_arch_target())
        with pytest.raises(ValidationError):
            patch.enabled = False  # type: ignore[misc]


class TestSharedRuntimePatch:
    def test_defaults_are_the_runtime_policy(self):
        patch = SharedRuntimePatch(srcs=("a.so",))
        assert patch.to_properties() == {
            "srcs": ["a.so"],
            "system_shared_libs": [],
            "sanitize": {"never": True},
            "strip": {"none": True},
            "pack_relocations": False,
            "stl": "none",
        }

    @pytest.mark.parametrize(
        "field,value",
        [
            ("sanitize_never", False),
            ("strip_none", False),
            ("pack_relocations", True),
            ("stl", "libc++"),
        ],
    )
    def test_policy_cannot_be_overridden(self, field: str, value):
        with pytest.raises(ValidationError):
            SharedRuntimePatch(srcs=("a.so",), **{field: value})

    def test_system_libs_must_be_empty(self):
        with pytest.raises(ValidationError, match="system_shared_libs"):
            SharedRuntimePatch(srcs=("a.so",), system_shared_libs=("libc",))


class TestArtifactPatchBase:
    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            ArtifactPatch(kind="static_runtime")


class TestTaggedUnion:
    adapter = TypeAdapter(ModulePropertyPatch)

    def test_dispatch_on_kind(self):
        patch = self.adapter.validate_python({"kind": "static_runtime", "srcs": ["x.a"]})
        assert isinstance(patch, StaticRuntimePatch)
        assert patch.srcs == ("x.a",)

    def test_shared_from_json(self):
        patch = self.adapter.validate_json('{"kind": "shared_runtime", "srcs": ["x.so"]}')
        assert isinstance(patch, SharedRuntimePatch)

    def test_dump_and_reload(self):
        patch = StaticMultiArchPatch(enabled=False, target=_all_arch_target())
        reloaded = self.adapter.validate_python(patch.model_dump(mode="json"))
        assert reloaded == patch

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python({"kind": "dynamic", "srcs": []})


class TestBuildFile:
    def test_empty(self):
        bf = BuildFile()
        assert bf.modules == []
        assert bf.env == {}
        assert bf.defaults.prebuilts_version is None

    def test_get_module(self):
        bf = BuildFile(
            modules=[
                ModuleDecl(name="prebuilt_libomp", type="llvm_prebuilt_library_static"),
                ModuleDecl(name="prebuilt_libFuzzer", type="llvm_prebuilt_library_static"),
            ]
        )
        assert bf.get_module("prebuilt_libomp") is not None
        assert bf.get_module("missing") is None

    def test_prefix_detection(self):
        assert ModuleDecl(name="prebuilt_x", type="t").has_prebuilt_prefix
        assert not ModuleDecl(name="x", type="t").has_prebuilt_prefix

    def test_numeric_versions_become_strings(self):
        bf = BuildFile.model_validate({"defaults": {"release_version": 12}})
        assert bf.defaults.release_version == "12"

    def test_boolean_env_values_become_strings(self):
        bf = BuildFile.model_validate({"env": {"A": True, "B": False, "C": "1"}})
        assert bf.env == {"A": "true", "B": "false", "C": "1"}

    def test_duplicate_names(self):
        bf = BuildFile(
            modules=[
                ModuleDecl(name="prebuilt_libomp", type="llvm_prebuilt_library_static"),
                ModuleDecl(name="prebuilt_libFuzzer", type="llvm_prebuilt_library_static"),
                ModuleDecl(name="prebuilt_libomp", type="llvm_prebuilt_library_static"),
            ]
        )
        assert bf.duplicate_names() == ["prebuilt_libomp"]
