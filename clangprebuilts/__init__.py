"""Clang prebuilts — resolve prebuilt compiler-runtime artifacts for build modules."""

__version__ = "0.1.0"
