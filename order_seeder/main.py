"""
Order Seeder - Backend API
Synthetic order generator for Shopify development stores
"""
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from order_seeder.api import orders
from order_seeder.core.config import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)

# Crear aplicación FastAPI
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION
)

# Include API routers
app.include_router(orders.router, prefix="/api/v1/orders", tags=["Orders"])


@app.get("/")
async def root():
    """Root endpoint - API status"""
    return {
        "message": settings.API_TITLE,
        "status": "online",
        "version": settings.API_VERSION
    }


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "order-seeder",
        "version": settings.API_VERSION,
        "shopify_configured": settings.shopify_configured
    }
