"""
Order Synthesizer - builds random but valid orderCreate payloads

Prices and the payment transaction are fixed placeholders: Shopify computes
real pricing on its side, we only need a syntactically valid request.

Author: TM3
Date: 2026-10-18
"""
import random
from decimal import Decimal
from typing import Optional, Sequence

from order_seeder.core.config import settings
from order_seeder.core.exceptions import InsufficientReferenceData
from order_seeder.domain.order import LineItem, OrderRequest, Transaction
from order_seeder.domain.reference import Customer, Product

MIN_QUANTITY = 1
MAX_QUANTITY = 10


class OrderSynthesizer:
    """
    Generates one OrderRequest per call from reference data

    Selection rules:
    - one customer, uniformly at random
    - 1..max_line_items products, uniformly with replacement
    - always the product's FIRST variant
    - quantity uniform in [1, 10], independent per line item
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 currency: str = None,
                 unit_price: Decimal = None,
                 transaction_amount: Decimal = None,
                 financial_status: str = None,
                 max_line_items: int = None):
        self.rng = rng or random.Random()
        self.currency = currency or settings.ORDER_CURRENCY
        self.unit_price = unit_price if unit_price is not None else settings.LINE_ITEM_PRICE
        self.transaction_amount = (
            transaction_amount if transaction_amount is not None else settings.TRANSACTION_AMOUNT
        )
        self.financial_status = financial_status or settings.FINANCIAL_STATUS
        self.max_line_items = max_line_items if max_line_items is not None else settings.MAX_LINE_ITEMS

        if self.max_line_items < 1:
            raise ValueError("max_line_items must be >= 1")

    def _pick(self, items: Sequence):
        return items[self.rng.randrange(len(items))]

    def synthesize(self, customers: Sequence[Customer], products: Sequence[Product]) -> OrderRequest:
        """
        Build a new random order request

        Raises:
            InsufficientReferenceData: empty pools or a selected product without variants
        """
        if not customers:
            raise InsufficientReferenceData("No customers available to associate with the order")
        if not products:
            raise InsufficientReferenceData("No products available to build line items")

        customer = self._pick(customers)
        line_count = self.rng.randint(1, self.max_line_items)

        line_items = []
        for _ in range(line_count):
            product = self._pick(products)
            variant = product.first_variant
            if variant is None:
                raise InsufficientReferenceData(f"Product {product.id} has no variants")

            line_items.append(LineItem(
                product_id=product.id,
                variant_id=variant.id,
                sku=variant.sku,
                vendor=product.vendor,
                quantity=self.rng.randint(MIN_QUANTITY, MAX_QUANTITY),
                unit_price=self.unit_price,
                currency=self.currency
            ))

        return OrderRequest(
            currency=self.currency,
            line_items=tuple(line_items),
            customer_id=customer.id,
            financial_status=self.financial_status,
            transactions=(
                Transaction(kind="SALE", status="SUCCESS",
                            amount=self.transaction_amount, currency=self.currency),
            )
        )
