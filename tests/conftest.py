"""
Pytest fixtures and configuration for Order Seeder tests

This file provides shared fixtures that can be used across all test modules.
No test talks to Shopify: connectors are mocked and sleeps are recorded
instead of awaited.

Author: TM3
Date: 2026-10-18
"""
import itertools
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from order_seeder.domain.order import LineItem, OrderRequest, Transaction
from order_seeder.domain.reference import Customer, Product, Variant


class SleepRecorder:
    """Drop-in for asyncio.sleep that returns immediately and records delays"""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def sample_customers():
    """
    Provides a small customer pool
    """
    return [
        Customer(id="gid://shopify/Customer/1001"),
        Customer(id="gid://shopify/Customer/1002"),
    ]


@pytest.fixture
def sample_products():
    """
    Provides products with variants (the first variant is the orderable one)
    """
    return [
        Product(
            id="gid://shopify/Product/2001",
            title="Barra Keto Cacao",
            handle="barra-keto-cacao",
            vendor="Grana",
            variants=(
                Variant(id="gid://shopify/ProductVariant/3001", sku="BAKC_U04010", title="Default Title"),
                Variant(id="gid://shopify/ProductVariant/3002", sku="BAKC_U20010", title="Display"),
            ),
        ),
        Product(
            id="gid://shopify/Product/2002",
            title="Granola Berries",
            handle="granola-berries",
            vendor=None,
            variants=(
                Variant(id="gid://shopify/ProductVariant/3003", sku="GRBE_U26010", title="Default Title"),
            ),
        ),
    ]


@pytest.fixture
def variantless_product():
    return Product(id="gid://shopify/Product/2999", title="Gift Card draft", variants=())


@pytest.fixture
def sample_order_request():
    """
    Provides a minimal valid order request
    """
    return OrderRequest(
        currency="EUR",
        line_items=(
            LineItem(
                product_id="gid://shopify/Product/2001",
                variant_id="gid://shopify/ProductVariant/3001",
                sku="BAKC_U04010",
                vendor="Grana",
                quantity=3,
                unit_price=Decimal("119.24"),
                currency="EUR",
            ),
        ),
        customer_id="gid://shopify/Customer/1001",
        financial_status="PAID",
        transactions=(Transaction(amount=Decimal("238.47"), currency="EUR"),),
    )


def order_created(order_id):
    """orderCreate payload for a created order"""
    return {'order': {'id': order_id}, 'userErrors': []}


def order_rejected(*messages):
    """orderCreate payload with userErrors"""
    return {
        'order': None,
        'userErrors': [{'field': ['order', 'lineItems'], 'message': m} for m in messages],
    }


@pytest.fixture
def mock_connector(sample_customers, sample_products):
    """
    Connector mock: reference fetches return the sample pools and every
    create_order call creates a new order with an increasing id
    """
    ids = itertools.count(1)
    connector = AsyncMock()
    connector.fetch_customers.return_value = sample_customers
    connector.fetch_products.return_value = sample_products
    connector.create_order.side_effect = lambda request: order_created(
        f"gid://shopify/Order/{next(ids)}"
    )
    return connector
