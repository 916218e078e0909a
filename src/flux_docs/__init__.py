"""Offline documentation lookup and fuzzy search for Flux UI."""

__version__ = "0.1.0"
