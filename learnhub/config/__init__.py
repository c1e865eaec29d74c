"""Configuration module for LearnHub."""

from learnhub.config.settings import (
    Settings,
    ApiSettings,
    CatalogSettings,
    PricingSettings,
    PlayerSettings,
    LoggingSettings,
    settings,
    get_api_settings,
    get_catalog_settings,
    get_pricing_settings,
    get_player_settings,
)

__all__ = [
    "Settings",
    "ApiSettings",
    "CatalogSettings",
    "PricingSettings",
    "PlayerSettings",
    "LoggingSettings",
    "settings",
    "get_api_settings",
    "get_catalog_settings",
    "get_pricing_settings",
    "get_player_settings",
]
