"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "tubestream",
    "environment": "dev",
    "source_name": "YouTube",
    "http": {
        "timeout_seconds": 15.0,
        "follow_redirects": True,
        "user_agent": "tubestream/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "resolver": {
        "invidious_url": "https://inv.nadeko.net",
        "local": False,
    },
}
