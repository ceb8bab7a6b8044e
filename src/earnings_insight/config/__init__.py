"""
Config package export.

    from earnings_insight.config import get_settings, Settings
"""

from __future__ import annotations

from .settings import Environment, Settings, get_settings, is_usable_key

__all__ = ["Environment", "Settings", "get_settings", "is_usable_key"]
