"""Uninstall inventory — normalized records of removable software."""

__version__ = "0.1.0"
