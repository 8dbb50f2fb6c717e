"""Assemble module documents from directory trees."""

__version__ = "0.1.0"
