"""Stream resolver implementations for fetching candidate endpoints."""

from __future__ import annotations

from .invidious import InvidiousStreamResolver

__all__ = ["InvidiousStreamResolver"]
