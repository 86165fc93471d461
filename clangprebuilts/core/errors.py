"""
Error types shared across the package.

Everything the package raises on purpose derives from ClangPrebuiltsError,
so callers can catch one type. The architecture lookup is the exception:
an unknown architecture is a programming defect and surfaces as ValueError.
"""

from __future__ import annotations


class ClangPrebuiltsError(Exception):
    """Base class for package errors."""


class ConfigError(ClangPrebuiltsError):
    """Raised when the build file is missing or invalid."""


class UnknownModuleTypeError(ClangPrebuiltsError):
    """Raised when a build file declares a module type nobody registered."""

    def __init__(self, module_type: str, known: list[str] | None = None):
        self.module_type = module_type
        self.known = sorted(known or [])
        msg = f"Unknown module type '{module_type}'"
        if self.known:
            msg += f" (known: {', '.join(self.known)})"
        super().__init__(msg)


class PatchApplyError(ClangPrebuiltsError):
    """Raised when the property sink cannot merge a patch into a module."""
