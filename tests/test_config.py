"""
Settings tests - defaults and environment overrides.
"""

from catalog_graphql.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.max_page_size == 100
    assert settings.sku_only_max_page_size == 50000
    assert settings.base_facets == ["price"]
    assert settings.show_out_of_stock_products is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("STORE_ID", "3")
    monkeypatch.setenv("SHOW_OUT_OF_STOCK_PRODUCTS", "true")
    monkeypatch.setenv("BASE_FACETS", '["price", "color"]')
    monkeypatch.setenv("CATEGORY_FACETS", '{"12": ["size"]}')
    settings = Settings(_env_file=None)
    assert settings.store_id == 3
    assert settings.show_out_of_stock_products is True
    assert settings.base_facets == ["price", "color"]
    assert settings.category_facets == {"12": ["size"]}
