"""
Shopify GraphQL Connector
Handles all interactions with the Shopify Admin API needed to seed orders

Author: TM3
Date: 2026-10-18
"""
import logging
from typing import Dict, List, Optional, Any

import httpx

from order_seeder.core.config import settings
from order_seeder.core.exceptions import ShopifyRateLimitError, ShopifyTransportError
from order_seeder.domain.order import OrderRequest
from order_seeder.domain.reference import Customer, Product, Variant

logger = logging.getLogger(__name__)


CUSTOMERS_QUERY = """
query ($first: Int!) {
  customers(first: $first) {
    nodes {
      id
    }
  }
}
"""

PRODUCTS_QUERY = """
query ($first: Int!, $variantsFirst: Int!) {
  products(first: $first) {
    nodes {
      id
      title
      handle
      vendor
      variants(first: $variantsFirst) {
        nodes {
          id
          title
          sku
        }
      }
    }
  }
}
"""

ORDER_CREATE_MUTATION = """
mutation OrderCreate($order: OrderCreateOrderInput!, $options: OrderCreateOptionsInput) {
  orderCreate(order: $order, options: $options) {
    userErrors {
      field
      message
    }
    order {
      id
    }
  }
}
"""


def _is_throttled(errors: Any) -> bool:
    """Check a GraphQL `errors` payload for Shopify's THROTTLED code"""
    if not isinstance(errors, list):
        return 'throttled' in str(errors).lower()
    for error in errors:
        if not isinstance(error, dict):
            continue
        code = (error.get('extensions') or {}).get('code')
        if code == 'THROTTLED':
            return True
    return False


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class ShopifyConnector:
    """
    Connector for Shopify GraphQL Admin API

    Handles:
    - Customer reference fetch
    - Product (with variants) reference fetch
    - Order creation (orderCreate mutation)
    - Throttling classification
    """

    def __init__(self, shop_name: str = None, access_token: str = None,
                 api_version: str = None, timeout: float = None,
                 transport: httpx.AsyncBaseTransport = None):
        """
        Initialize Shopify connector

        Args:
            shop_name: Shopify store name (e.g., 'my-dev-store')
            access_token: Shopify Admin API access token
            api_version: Admin API version (e.g., '2024-10')
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.shop_name = shop_name or settings.SHOPIFY_STORE_NAME
        self.access_token = access_token or settings.SHOPIFY_PASSWORD
        self.api_version = api_version or settings.SHOPIFY_API_VERSION
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS
        self.transport = transport

        if not self.shop_name or not self.access_token:
            raise ValueError("Shopify credentials not configured. Set SHOPIFY_STORE_NAME and SHOPIFY_PASSWORD")

        self.api_url = f"https://{self.shop_name}.myshopify.com/admin/api/{self.api_version}/graphql.json"
        self.headers = {
            'Content-Type': 'application/json',
            'X-Shopify-Access-Token': self.access_token
        }

    async def _execute_query(self, query: str, variables: Dict = None) -> Dict:
        """
        Execute a GraphQL query

        Raises:
            ShopifyRateLimitError: HTTP 429 or GraphQL THROTTLED error
            ShopifyTransportError: Any other failure to get a `data` payload
        """
        payload = {'query': query}
        if variables:
            payload['variables'] = variables

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers=self.headers,
                    timeout=self.timeout
                )
        except httpx.TimeoutException as e:
            raise ShopifyTransportError(f"Shopify request timed out after {self.timeout}s: {e}") from e
        except httpx.HTTPError as e:
            raise ShopifyTransportError(f"Shopify request failed: {e}") from e

        if response.status_code == 429:
            raise ShopifyRateLimitError(
                "Shopify rate limit exceeded (HTTP 429)",
                status_code=429,
                retry_after=_parse_retry_after(response.headers.get('Retry-After'))
            )
        if response.status_code >= 400:
            raise ShopifyTransportError(
                f"Shopify HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ShopifyTransportError(f"Invalid JSON from Shopify: {e}") from e

        if data.get('errors'):
            if _is_throttled(data['errors']):
                raise ShopifyRateLimitError(f"Shopify GraphQL throttled: {data['errors']}")
            raise ShopifyTransportError(f"Shopify GraphQL errors: {data['errors']}")

        return data.get('data') or {}

    async def get_customers(self, limit: int = 10) -> Dict:
        """
        Get raw customer nodes from Shopify

        Args:
            limit: Number of customers to fetch (max 250)
        """
        return await self._execute_query(CUSTOMERS_QUERY, {'first': limit})

    async def get_products(self, limit: int = 50, variant_limit: int = 100) -> Dict:
        """
        Get raw product nodes (with variants) from Shopify

        Args:
            limit: Number of products to fetch (max 250)
            variant_limit: Number of variants per product
        """
        return await self._execute_query(
            PRODUCTS_QUERY,
            {'first': limit, 'variantsFirst': variant_limit}
        )

    async def fetch_customers(self, limit: int = 10) -> List[Customer]:
        """
        Fetch customers as domain models

        Never raises on remote failure: logs and returns an empty list so a
        failing sub-query doesn't fail the whole reference fetch.
        """
        try:
            result = await self.get_customers(limit=limit)
        except ShopifyTransportError as e:
            logger.error(f"Customer fetch failed: {e}")
            return []

        nodes = (result.get('customers') or {}).get('nodes') or []
        customers = [c for c in (self.normalize_customer(node) for node in nodes) if c]
        logger.info(f"Fetched {len(customers)} customers")
        return customers

    async def fetch_products(self, limit: int = 50, variant_limit: int = 100) -> List[Product]:
        """
        Fetch products (with variants) as domain models

        Same failure tolerance as fetch_customers.
        """
        try:
            result = await self.get_products(limit=limit, variant_limit=variant_limit)
        except ShopifyTransportError as e:
            logger.error(f"Product fetch failed: {e}")
            return []

        nodes = (result.get('products') or {}).get('nodes') or []
        products = [p for p in (self.normalize_product(node) for node in nodes) if p]
        logger.info(f"Fetched {len(products)} products")
        return products

    async def create_order(self, request: OrderRequest) -> Dict:
        """
        Run the orderCreate mutation

        Args:
            request: Order to create

        Returns:
            The `orderCreate` payload: {'order': {'id': ...} | None, 'userErrors': [...]}

        Raises:
            ShopifyRateLimitError, ShopifyTransportError
        """
        variables = {'order': request.to_graphql_input()}
        result = await self._execute_query(ORDER_CREATE_MUTATION, variables)

        payload = result.get('orderCreate')
        if payload is None:
            raise ShopifyTransportError("Shopify response missing orderCreate payload")
        return payload

    def normalize_customer(self, node: Dict) -> Optional[Customer]:
        """Convert a raw customer node into a Customer (None if malformed)"""
        if not node or not node.get('id'):
            return None
        return Customer(id=node['id'])

    def normalize_product(self, node: Dict) -> Optional[Product]:
        """
        Convert a raw product node into a Product

        Variants are kept in Shopify's order; nodes without an id are dropped.
        """
        if not node or not node.get('id'):
            return None

        variants = []
        for variant in (node.get('variants') or {}).get('nodes') or []:
            if not variant or not variant.get('id'):
                continue
            variants.append(Variant(
                id=variant['id'],
                sku=variant.get('sku') or None,
                title=variant.get('title')
            ))

        return Product(
            id=node['id'],
            title=node.get('title'),
            handle=node.get('handle'),
            vendor=node.get('vendor') or None,
            variants=tuple(variants)
        )

    async def test_connection(self) -> Dict:
        """Test Shopify connection"""
        query = """
        {
          shop {
            name
            email
            currencyCode
            primaryDomain {
              url
            }
          }
        }
        """

        try:
            result = await self._execute_query(query)
            shop = result.get('shop', {})
            return {
                'success': True,
                'shop_name': shop.get('name'),
                'email': shop.get('email'),
                'currency': shop.get('currencyCode'),
                'url': (shop.get('primaryDomain') or {}).get('url')
            }
        except ShopifyTransportError as e:
            return {
                'success': False,
                'error': str(e)
            }
