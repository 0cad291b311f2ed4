"""
Configuration package for the hotel booking service.

Environment settings are loaded once and shared through `settings`.
"""

from app.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
