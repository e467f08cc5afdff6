"""
Configuration package for the hostel marketplace API.
"""

from nepstay.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
