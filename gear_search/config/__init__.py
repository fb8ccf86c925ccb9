"""Configuration module for Gear Search."""

from .search_config import (
    SEARCH_CONFIG,
    GearSearchSettings,
    SearchSettings,
    FuzzyConfig,
    DatabaseConfig,
    get_search_settings,
)

__all__ = [
    'SEARCH_CONFIG',
    'GearSearchSettings',
    'SearchSettings',
    'FuzzyConfig',
    'DatabaseConfig',
    'get_search_settings',
]
