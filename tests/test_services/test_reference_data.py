"""
Unit tests for the reference data cache

Author: TM3
Date: 2026-10-18
"""
import asyncio
from unittest.mock import AsyncMock

from order_seeder.services.reference_data import ReferenceData, load_reference_data


class TestReferenceData:
    """Test ReferenceData snapshot"""

    def test_eligible_products_excludes_variantless(self, sample_customers, sample_products, variantless_product):
        """Test eligible_products skips products without variants"""
        data = ReferenceData.build(sample_customers, sample_products + [variantless_product])

        assert len(data.products) == 3
        assert data.eligible_products == tuple(sample_products)
        assert not data.is_empty

    def test_is_empty_without_customers(self, sample_products):
        """Test reference data without customers is empty"""
        assert ReferenceData.build([], sample_products).is_empty

    def test_is_empty_with_only_variantless_products(self, sample_customers, variantless_product):
        """Test reference data with only variantless products is empty"""
        assert ReferenceData.build(sample_customers, [variantless_product]).is_empty

    def test_load_fetches_with_limits(self, sample_customers, sample_products):
        """Test load_reference_data passes explicit limits to the connector"""
        connector = AsyncMock()
        connector.fetch_customers.return_value = sample_customers
        connector.fetch_products.return_value = sample_products

        data = asyncio.run(load_reference_data(connector, customer_limit=20, product_limit=30, variant_limit=5))

        connector.fetch_customers.assert_awaited_once_with(limit=20)
        connector.fetch_products.assert_awaited_once_with(limit=30, variant_limit=5)
        assert data.customers == tuple(sample_customers)
        assert data.products == tuple(sample_products)

    def test_load_tolerates_empty_results(self):
        """Test empty fetch results give an empty snapshot"""
        connector = AsyncMock()
        connector.fetch_customers.return_value = []
        connector.fetch_products.return_value = []

        data = asyncio.run(load_reference_data(connector))

        assert data.customers == ()
        assert data.is_empty

    def test_load_defaults_come_from_settings(self, monkeypatch):
        """Test fetch limits default to the configured values"""
        from order_seeder.core import config

        monkeypatch.setattr(config.settings, 'CUSTOMER_FETCH_LIMIT', 7)
        monkeypatch.setattr(config.settings, 'PRODUCT_FETCH_LIMIT', 8)
        monkeypatch.setattr(config.settings, 'VARIANT_FETCH_LIMIT', 9)
        connector = AsyncMock()
        connector.fetch_customers.return_value = []
        connector.fetch_products.return_value = []

        asyncio.run(load_reference_data(connector))

        connector.fetch_customers.assert_awaited_once_with(limit=7)
        connector.fetch_products.assert_awaited_once_with(limit=8, variant_limit=9)
