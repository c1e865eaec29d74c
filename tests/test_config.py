from learnhub.config import (
    ApiSettings,
    CatalogSettings,
    PricingSettings,
    get_catalog_settings,
    get_pricing_settings,
    settings,
)


def test_defaults():
    assert settings.catalog.per_page == 4
    assert settings.catalog.default_sort == "newest"
    assert settings.player.playback_rates == [0.5, 0.75, 1.0, 1.25, 1.5, 2.0]
    assert get_catalog_settings() is settings.catalog


def test_discount_rate_lookup():
    pricing = get_pricing_settings()
    assert pricing.discount_rate("SAVE20") == 0.20
    assert pricing.discount_rate(" save20 ") == 0.20
    assert pricing.discount_rate("OTHER") == 0.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LEARNHUB_API_BASE_URL", "https://api.learnhub.test")
    monkeypatch.setenv("CATALOG_PER_PAGE", "12")
    monkeypatch.setenv("PRICING_PROMO_CODES", '{"WELCOME10": 0.1}')

    assert ApiSettings().base_url == "https://api.learnhub.test"
    assert CatalogSettings().per_page == 12
    assert PricingSettings().discount_rate("welcome10") == 0.1
