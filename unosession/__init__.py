"""Authoritative UNO game sessions."""

__version__ = "0.1.0"
