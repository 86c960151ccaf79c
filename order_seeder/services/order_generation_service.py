"""
Order Generation Service - business logic behind "generate N orders"

Wires the Shopify connector, synthesizer, submitter and orchestrator
together for one run:
1. Validate the request (no remote calls on bad input)
2. Fetch fresh customers and products
3. Run paced batches
4. Return the BatchReport

Author: TM3
Date: 2026-10-18
"""
import asyncio
import logging
import random
from typing import Optional

from order_seeder.core.config import Settings, settings as default_settings
from order_seeder.core.exceptions import InvalidRequest
from order_seeder.domain.outcome import BatchReport
from order_seeder.services.batch_orchestrator import BatchCallback, BatchOrchestrator
from order_seeder.services.order_submitter import OrderSubmitter, RetryPolicy
from order_seeder.services.order_synthesizer import OrderSynthesizer
from order_seeder.services.reference_data import load_reference_data

logger = logging.getLogger(__name__)


class OrderGenerationService:
    """
    Service for seeding a Shopify store with synthetic orders

    Args:
        connector: ShopifyConnector (or anything with the same fetch/create methods)
        config: Settings instance (defaults to the global one)
        rng: Random source for the synthesizer (seed it for reproducible payloads)
        sleep: Awaitable sleep used for pacing and backoff
    """

    def __init__(self, connector, config: Settings = None,
                 rng: Optional[random.Random] = None, sleep=asyncio.sleep):
        self.connector = connector
        self.config = config or default_settings

        self.synthesizer = OrderSynthesizer(
            rng=rng,
            currency=self.config.ORDER_CURRENCY,
            unit_price=self.config.LINE_ITEM_PRICE,
            transaction_amount=self.config.TRANSACTION_AMOUNT,
            financial_status=self.config.FINANCIAL_STATUS,
            max_line_items=self.config.MAX_LINE_ITEMS
        )
        self.submitter = OrderSubmitter(
            connector,
            policy=RetryPolicy.from_settings(self.config),
            sleep=sleep
        )
        self.orchestrator = BatchOrchestrator(
            self.synthesizer,
            self.submitter,
            batch_size=self.config.DEFAULT_BATCH_SIZE,
            inter_batch_delay=self.config.DEFAULT_BATCH_DELAY_SECONDS,
            sleep=sleep
        )

    async def generate(self, count: int, batch_size: int = None,
                       inter_batch_delay: float = None,
                       cancel_event: Optional[asyncio.Event] = None,
                       on_batch_complete: Optional[BatchCallback] = None) -> BatchReport:
        """
        Generate `count` orders in the configured Shopify store

        Raises:
            InvalidRequest: before any remote call (including the reference fetch)
        """
        if count is None or count <= 0:
            raise InvalidRequest(f"Order count must be a positive integer, got {count}")
        if batch_size is not None and batch_size <= 0:
            raise InvalidRequest(f"Batch size must be a positive integer, got {batch_size}")
        if inter_batch_delay is not None and inter_batch_delay < 0:
            raise InvalidRequest(f"Inter-batch delay cannot be negative, got {inter_batch_delay}")

        reference = await load_reference_data(
            self.connector,
            customer_limit=self.config.CUSTOMER_FETCH_LIMIT,
            product_limit=self.config.PRODUCT_FETCH_LIMIT,
            variant_limit=self.config.VARIANT_FETCH_LIMIT
        )
        if reference.is_empty:
            logger.warning("Reference data is empty; every order will fail synthesis")

        return await self.orchestrator.run(
            count,
            reference.customers,
            reference.eligible_products,
            batch_size=batch_size,
            inter_batch_delay=inter_batch_delay,
            cancel_event=cancel_event,
            on_batch_complete=on_batch_complete
        )
