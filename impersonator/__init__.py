"""Impersonator: original lyrics in the style of an existing song."""

__version__ = "1.0.0"
