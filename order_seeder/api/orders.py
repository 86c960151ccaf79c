"""
Order Generation API Endpoints
Inbound trigger for seeding synthetic orders into Shopify

Author: TM3
Date: 2026-10-18
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from typing import Optional

from order_seeder.connectors.shopify_connector import ShopifyConnector
from order_seeder.core.exceptions import InvalidRequest
from order_seeder.services.order_generation_service import OrderGenerationService

router = APIRouter()


# Pydantic models
class GenerateOrdersRequest(BaseModel):
    count: int = Field(..., description="Number of orders to create")
    batch_size: Optional[int] = Field(None, description="Orders per batch (default from settings)")
    inter_batch_delay: Optional[float] = Field(None, description="Seconds between batches (default from settings)")


# Dependency: Get services
def get_shopify_connector() -> ShopifyConnector:
    try:
        return ShopifyConnector()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))


def get_generation_service(
    connector: ShopifyConnector = Depends(get_shopify_connector)
) -> OrderGenerationService:
    return OrderGenerationService(connector)


@router.get("/test-connection")
async def test_shopify_connection(connector: ShopifyConnector = Depends(get_shopify_connector)):
    """Test connection to Shopify"""
    result = await connector.test_connection()

    if not result['success']:
        raise HTTPException(status_code=502, detail=result.get('error'))

    return {
        "status": "success",
        "message": "Connected to Shopify",
        "data": result
    }


@router.post("/generate")
async def generate_orders(
    request: GenerateOrdersRequest,
    service: OrderGenerationService = Depends(get_generation_service)
):
    """
    Generate synthetic orders in Shopify

    This will:
    1. Fetch customers and products from Shopify
    2. Create `count` random orders in paced batches
    3. Return one outcome per requested order plus a summary

    The request stays open until the last batch finishes.
    """
    try:
        report = await service.generate(
            request.count,
            batch_size=request.batch_size,
            inter_batch_delay=request.inter_batch_delay
        )
    except InvalidRequest as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "status": "success",
        **report.to_dict()
    }
