"""Gridfolio: terminal editor for profile + showcase card documents."""

__version__ = "0.1.0"
