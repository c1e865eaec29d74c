"""Configuration settings for LearnHub.

All configuration is centralized here using Pydantic Settings for validation
and environment variable support.

Environment Variables:
    LEARNHUB_API_BASE_URL: Backend base URL (default: http://localhost:4000)
    LEARNHUB_API_TIMEOUT: Request timeout in seconds
    LEARNHUB_API_MAX_RETRIES: Max attempts for a request on transport errors
    CATALOG_PER_PAGE: Courses per catalog page (default: 4)
    PRICING_PROMO_CODES: JSON object of promo code -> discount rate
    PLAYER_PLAYBACK_RATES: JSON list of allowed playback rates
    LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
"""

from typing import Dict, List

from pydantic import Field
from pydantic_settings import BaseSettings


class ApiSettings(BaseSettings):
    """Backend API connection settings."""

    base_url: str = Field(default="http://localhost:4000")
    timeout: float = Field(default=10.0, gt=0)
    max_retries: int = Field(default=2, ge=1, le=10)
    retry_delay: float = Field(default=0.5, ge=0.0)

    class Config:
        env_prefix = "LEARNHUB_API_"


class CatalogSettings(BaseSettings):
    """Course catalog browsing settings."""

    per_page: int = Field(default=4, ge=1, le=100)
    page_window: int = Field(default=5, ge=1)
    default_sort: str = Field(default="newest")
    categories: List[str] = Field(
        default_factory=lambda: [
            "Web Development",
            "Mobile Development",
            "Data Science",
            "Machine Learning",
            "Business",
            "Marketing",
            "Design",
            "Photography",
        ]
    )
    levels: List[str] = Field(
        default_factory=lambda: ["Beginner", "Intermediate", "Advanced"]
    )

    class Config:
        env_prefix = "CATALOG_"


class PricingSettings(BaseSettings):
    """Cart pricing settings."""

    promo_codes: Dict[str, float] = Field(default_factory=lambda: {"SAVE20": 0.20})

    class Config:
        env_prefix = "PRICING_"

    def discount_rate(self, code: str) -> float:
        """Get the discount rate for a promo code, 0.0 if unknown."""
        lookup = {key.upper(): rate for key, rate in self.promo_codes.items()}
        return lookup.get(code.strip().upper(), 0.0)


class PlayerSettings(BaseSettings):
    """Lecture player settings."""

    playback_rates: List[float] = Field(
        default_factory=lambda: [0.5, 0.75, 1.0, 1.25, 1.5, 2.0]
    )

    class Config:
        env_prefix = "PLAYER_"


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO")
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    class Config:
        env_prefix = "LOG_"


class Settings(BaseSettings):
    """Main settings container combining all configuration."""

    api: ApiSettings = Field(default_factory=ApiSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    pricing: PricingSettings = Field(default_factory=PricingSettings)
    player: PlayerSettings = Field(default_factory=PlayerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance - import this in other modules
settings = Settings()


def get_api_settings() -> ApiSettings:
    """Get API settings."""
    return settings.api


def get_catalog_settings() -> CatalogSettings:
    """Get catalog settings."""
    return settings.catalog


def get_pricing_settings() -> PricingSettings:
    """Get pricing settings."""
    return settings.pricing


def get_player_settings() -> PlayerSettings:
    """Get player settings."""
    return settings.player
