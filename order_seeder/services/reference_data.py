"""
Reference Data Cache

Holds the customer and product collections for ONE generation run.
Loaded fresh on every run (inventory and customers change between runs)
and read-only while orders are being submitted.

Author: TM3
Date: 2026-10-18
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, Tuple

from order_seeder.core.config import settings
from order_seeder.domain.reference import Customer, Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceData:
    customers: Tuple[Customer, ...]
    products: Tuple[Product, ...]

    @classmethod
    def build(cls, customers: Iterable[Customer], products: Iterable[Product]) -> "ReferenceData":
        return cls(customers=tuple(customers), products=tuple(products))

    @property
    def eligible_products(self) -> Tuple[Product, ...]:
        """Products that can be sampled (at least one variant)"""
        return tuple(p for p in self.products if p.has_variants)

    @property
    def is_empty(self) -> bool:
        return not self.customers or not self.eligible_products


async def load_reference_data(connector, customer_limit: int = None,
                              product_limit: int = None,
                              variant_limit: int = None) -> ReferenceData:
    """
    Fetch customers and products concurrently

    The connector's fetch methods tolerate remote failures by returning
    empty lists; empty pools are reported per-unit at synthesis time,
    not here.

    Args:
        connector: Object exposing fetch_customers / fetch_products
        customer_limit: Max customers to fetch (default CUSTOMER_FETCH_LIMIT)
        product_limit: Max products to fetch (default PRODUCT_FETCH_LIMIT)
        variant_limit: Max variants per product (default VARIANT_FETCH_LIMIT)

    Returns:
        ReferenceData snapshot for this run
    """
    customer_limit = customer_limit if customer_limit is not None else settings.CUSTOMER_FETCH_LIMIT
    product_limit = product_limit if product_limit is not None else settings.PRODUCT_FETCH_LIMIT
    variant_limit = variant_limit if variant_limit is not None else settings.VARIANT_FETCH_LIMIT

    customers, products = await asyncio.gather(
        connector.fetch_customers(limit=customer_limit),
        connector.fetch_products(limit=product_limit, variant_limit=variant_limit),
    )
    data = ReferenceData.build(customers, products)

    skipped = len(data.products) - len(data.eligible_products)
    if skipped:
        logger.warning(f"Excluding {skipped} products without variants from sampling")
    logger.info(
        f"Reference data loaded: {len(data.customers)} customers, "
        f"{len(data.eligible_products)} eligible products"
    )
    return data
