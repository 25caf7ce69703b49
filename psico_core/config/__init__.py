"""
Runtime configuration for the PSICO dashboard.
"""

from .settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
