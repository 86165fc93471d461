"""Core — pure resolution logic, models, configuration."""
