"""
Order Request Domain Models

Value objects describing one synthetic order to be sent to the
`orderCreate` mutation. An OrderRequest is built fresh per submission
and never mutated afterwards.

Author: TM3
Date: 2026-10-18
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Tuple
from decimal import Decimal


def _money(amount: Decimal, currency: str) -> dict:
    """Shopify MoneyBag input with shop currency only"""
    return {'shopMoney': {'amount': str(amount), 'currencyCode': currency}}


class LineItem(BaseModel):
    """
    Order line item

    Fields:
        product_id: Shopify product GID
        variant_id: Shopify variant GID (always the product's first variant)
        sku: Variant SKU at time of order
        vendor: Product vendor
        quantity: Units ordered (1..10)
        unit_price: Placeholder price per unit
        currency: ISO currency code for unit_price
    """

    product_id: str = Field(..., description="Shopify product GID")
    variant_id: str = Field(..., description="Shopify variant GID")
    sku: Optional[str] = Field(None, description="Variant SKU")
    vendor: Optional[str] = Field(None, description="Product vendor")
    quantity: int = Field(..., description="Quantity ordered", ge=1, le=10)
    unit_price: Decimal = Field(..., description="Price per unit", ge=0)
    currency: str = Field(..., description="Currency code")

    model_config = ConfigDict(frozen=True)

    def to_graphql_input(self) -> dict:
        return {
            'productId': self.product_id,
            'variantId': self.variant_id,
            'sku': self.sku,
            'vendor': self.vendor,
            'quantity': self.quantity,
            'priceSet': _money(self.unit_price, self.currency),
        }


class Transaction(BaseModel):
    """Payment transaction attached to the order (synthetic SALE/SUCCESS)"""

    kind: str = Field("SALE", description="Transaction kind")
    status: str = Field("SUCCESS", description="Transaction status")
    amount: Decimal = Field(..., description="Transaction amount", ge=0)
    currency: str = Field(..., description="Currency code")

    model_config = ConfigDict(frozen=True)

    def to_graphql_input(self) -> dict:
        return {
            'kind': self.kind,
            'status': self.status,
            'amountSet': _money(self.amount, self.currency),
        }


class OrderRequest(BaseModel):
    """
    Order creation request - one unit of work for the submitter

    Fields:
        currency: Order currency code (configuration constant)
        line_items: Ordered line items (one or two)
        customer_id: Shopify customer GID to associate
        financial_status: Financial status tag (PAID)
        transactions: Payment transactions
    """

    currency: str = Field(..., description="Order currency code")
    line_items: Tuple[LineItem, ...] = Field(..., description="Line items", min_length=1)
    customer_id: str = Field(..., description="Shopify customer GID")
    financial_status: str = Field("PAID", description="Financial status")
    transactions: Tuple[Transaction, ...] = Field(default_factory=tuple, description="Transactions")

    model_config = ConfigDict(frozen=True)

    @property
    def total_quantity(self) -> int:
        """Total quantity of all line items"""
        return sum(item.quantity for item in self.line_items)

    def to_graphql_input(self) -> dict:
        """
        Build the `OrderCreateOrderInput` variable for the orderCreate mutation

        Returns:
            Dict ready to be sent as `variables.order`
        """
        return {
            'currency': self.currency,
            'lineItems': [item.to_graphql_input() for item in self.line_items],
            'customer': {'toAssociate': {'id': self.customer_id}},
            'financialStatus': self.financial_status,
            'transactions': [txn.to_graphql_input() for txn in self.transactions],
        }
