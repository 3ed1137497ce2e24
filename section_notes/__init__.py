"""Sectioned notes with a wholesale-synced JSON store."""

__version__ = "0.1.0"
