"""Declarative UI engine: GUIs described by YAML, rendered one frame at a time."""

__version__ = "0.1.0"
