"""Utility modules for anifranchise."""

from anifranchise.utils.config import resolve_setting

__all__ = ["resolve_setting"]
