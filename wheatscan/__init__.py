"""Wheat plant disease diagnosis client."""

__version__ = "0.1.0"
