"""Aggregate reporting over license and permit application records."""

__version__ = "0.1.0"
