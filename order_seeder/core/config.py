"""
Configuración centralizada de la aplicación
"""
from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuración de la aplicación"""

    # API Settings
    API_TITLE: str = "Order Seeder API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Synthetic order generator for Shopify stores"
    LOG_LEVEL: str = "INFO"

    # Shopify Admin API
    SHOPIFY_STORE_NAME: str = ""
    SHOPIFY_PASSWORD: str = ""
    SHOPIFY_API_VERSION: str = "2024-10"
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # Reference data limits (first: N in the loader queries)
    CUSTOMER_FETCH_LIMIT: int = 10
    PRODUCT_FETCH_LIMIT: int = 50
    VARIANT_FETCH_LIMIT: int = 100

    # Order payload placeholders; real pricing is computed by Shopify
    ORDER_CURRENCY: str = "EUR"
    LINE_ITEM_PRICE: Decimal = Decimal("119.24")
    TRANSACTION_AMOUNT: Decimal = Decimal("238.47")
    FINANCIAL_STATUS: str = "PAID"
    MAX_LINE_ITEMS: int = 2

    # Batch pacing
    DEFAULT_BATCH_SIZE: int = 5
    DEFAULT_BATCH_DELAY_SECONDS: float = 10.0

    # Retry policy
    RATE_LIMIT_BACKOFF_SECONDS: float = 60.0
    RATE_LIMIT_BACKOFF_MULTIPLIER: float = 2.0
    MAX_BACKOFF_SECONDS: float = 300.0
    MAX_RATE_LIMIT_RETRIES: int = 3
    RETRY_TRANSPORT_ERRORS: bool = True
    RETRY_VALIDATION_ERRORS: bool = False
    VALIDATION_RETRY_DELAY_SECONDS: float = 1.0
    MAX_VALIDATION_RETRIES: int = 1

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def shopify_configured(self) -> bool:
        return bool(self.SHOPIFY_STORE_NAME and self.SHOPIFY_PASSWORD)


@lru_cache()
def get_settings() -> Settings:
    """FastAPI dependency / cached accessor for Settings"""
    return Settings()


settings = get_settings()
