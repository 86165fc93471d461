"""Configuration — build file loading and environment resolution."""
