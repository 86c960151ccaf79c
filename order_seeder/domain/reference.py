"""
Reference Data Domain Models

Customers and products fetched from Shopify once per generation run.
These are read-only during submission, so every model here is frozen.

Author: TM3
Date: 2026-10-18
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Tuple


class Customer(BaseModel):
    """
    Customer reference - only the Shopify GID is needed to associate an order

    Fields:
        id: Shopify customer GID (gid://shopify/Customer/123)
    """

    id: str = Field(..., description="Shopify customer GID")

    model_config = ConfigDict(frozen=True)


class Variant(BaseModel):
    """
    Product variant - the orderable unit

    Fields:
        id: Shopify variant GID
        sku: Variant SKU (may be empty in Shopify)
        title: Variant title ("Default Title" for single-variant products)
    """

    id: str = Field(..., description="Shopify variant GID")
    sku: Optional[str] = Field(None, description="Variant SKU")
    title: Optional[str] = Field(None, description="Variant title")

    model_config = ConfigDict(frozen=True)


class Product(BaseModel):
    """
    Product reference with its variants

    A product is only eligible for order synthesis when it has at least
    one variant; the synthesizer always orders the first one.
    """

    id: str = Field(..., description="Shopify product GID")
    title: Optional[str] = Field(None, description="Product title")
    handle: Optional[str] = Field(None, description="Product handle")
    vendor: Optional[str] = Field(None, description="Product vendor")
    variants: Tuple[Variant, ...] = Field(default_factory=tuple, description="Product variants")

    model_config = ConfigDict(frozen=True)

    @property
    def has_variants(self) -> bool:
        """Check if product can be ordered"""
        return len(self.variants) > 0

    @property
    def first_variant(self) -> Optional[Variant]:
        """The variant used for synthetic line items"""
        return self.variants[0] if self.variants else None
