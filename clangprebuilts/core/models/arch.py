"""
Architecture model — target architectures and their artifact subdirectories.

The upstream clang prebuilts lay out runtime libraries under triplet-like
directory names (``aarch64``, ``i386``) that do not match the build
system's own architecture identifiers. ARCH_SUBDIRS is the single
translation point between the two.
"""

from __future__ import annotations

from enum import Enum


class Arch(str, Enum):
    """Supported device target architectures."""

    ARM = "arm"
    ARM64 = "arm64"
    MIPS = "mips"
    MIPS64 = "mips64"
    X86 = "x86"
    X86_64 = "x86_64"

    @property
    def target_key(self) -> str:
        """Property key of this architecture's per-target block."""
        return f"android_{self.value}"


# Ordered as the upstream distribution lists them.
ARCH_SUBDIRS: dict[Arch, str] = {
    Arch.ARM: "arm",
    Arch.ARM64: "aarch64",
    Arch.MIPS: "mips",
    Arch.MIPS64: "mips64",
    Arch.X86: "i386",
    Arch.X86_64: "x86_64",
}

_missing = [a.value for a in Arch if a not in ARCH_SUBDIRS]
if _missing:
    raise RuntimeError(f"ARCH_SUBDIRS has no entry for: {', '.join(_missing)}")


def subdir_for(arch: Arch | str) -> str:
    """Return the prebuilt artifact subdirectory for an architecture.

    Raises:
        ValueError: If ``arch`` is not one of the supported identifiers.
    """
    return ARCH_SUBDIRS[Arch(arch)]
