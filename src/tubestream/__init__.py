"""Resolve video watch links into playable stream endpoints."""

__version__ = "0.1.0"
