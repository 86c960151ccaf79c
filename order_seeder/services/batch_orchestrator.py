"""
Batch Orchestrator - turns "create N orders" into paced, concurrent batches

Run lifecycle:
    Idle -> Batching(i) -> Submitting (fan-out / fan-in) -> Waiting -> Batching(i+1) ... -> Done

Every unit of work in a batch is started concurrently and the whole batch is
awaited before moving on. Between batches (never after the last one) the run
sleeps for the inter-batch delay to stay under Shopify's request-rate limits.
A failing unit never aborts the run; only invalid input does, before any
remote call is made.

Author: TM3
Date: 2026-10-18
"""
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence

from order_seeder.core.config import settings
from order_seeder.core.exceptions import InsufficientReferenceData, InvalidRequest
from order_seeder.domain.outcome import (
    BatchReport,
    Cancelled,
    SubmissionOutcome,
    SynthesisFailed,
    TransportFailed,
)
from order_seeder.domain.reference import Customer, Product
from order_seeder.services.order_submitter import OrderSubmitter, sleep_unless_cancelled
from order_seeder.services.order_synthesizer import OrderSynthesizer
from order_seeder.services.result_aggregator import aggregate, log_summary

logger = logging.getLogger(__name__)

BatchCallback = Callable[[int, int, List[SubmissionOutcome]], None]


def partition_batches(count: int, batch_size: int) -> List[int]:
    """
    Split `count` units into batch sizes

    Example:
        partition_batches(12, 5) -> [5, 5, 2]
    """
    if count <= 0:
        raise InvalidRequest(f"Order count must be a positive integer, got {count}")
    if batch_size <= 0:
        raise InvalidRequest(f"Batch size must be a positive integer, got {batch_size}")

    full, rest = divmod(count, batch_size)
    sizes = [batch_size] * full
    if rest:
        sizes.append(rest)
    return sizes


class BatchOrchestrator:
    """
    Drives synthesizer + submitter over batches

    Args:
        synthesizer: OrderSynthesizer used for every unit (and every retry)
        submitter: OrderSubmitter performing the remote calls
        batch_size: Default units per batch
        inter_batch_delay: Default seconds to wait between batches
        sleep: Awaitable sleep function, injectable for tests
    """

    def __init__(self, synthesizer: OrderSynthesizer, submitter: OrderSubmitter,
                 batch_size: int = None, inter_batch_delay: float = None,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.synthesizer = synthesizer
        self.submitter = submitter
        self.batch_size = batch_size if batch_size is not None else settings.DEFAULT_BATCH_SIZE
        self.inter_batch_delay = (
            inter_batch_delay if inter_batch_delay is not None
            else settings.DEFAULT_BATCH_DELAY_SECONDS
        )
        self.sleep = sleep

    async def run(self, count: int, customers: Sequence[Customer], products: Sequence[Product],
                  batch_size: int = None, inter_batch_delay: float = None,
                  cancel_event: Optional[asyncio.Event] = None,
                  on_batch_complete: Optional[BatchCallback] = None) -> BatchReport:
        """
        Generate `count` orders in paced batches

        Args:
            count: Number of orders to create (> 0)
            customers: Customer pool (read-only)
            products: Product pool (read-only); products without variants are skipped
            batch_size: Units per batch (defaults to the orchestrator's)
            inter_batch_delay: Seconds between batches (defaults to the orchestrator's)
            cancel_event: When set, no further batch is started and units in retry
                backoff stop without another remote call
            on_batch_complete: Called after each batch with (index, batch_count, outcomes)

        Returns:
            BatchReport with exactly `count` outcomes

        Raises:
            InvalidRequest: count/batch_size not positive or negative delay
        """
        batch_size = batch_size if batch_size is not None else self.batch_size
        delay = inter_batch_delay if inter_batch_delay is not None else self.inter_batch_delay
        sizes = partition_batches(count, batch_size)
        if delay < 0:
            raise InvalidRequest(f"Inter-batch delay cannot be negative, got {delay}")

        customers = tuple(customers)
        products = tuple(p for p in products if p.has_variants)

        logger.info(f"Order generation started: {count} orders in {len(sizes)} batches of up to {batch_size}")

        outcomes: List[SubmissionOutcome] = []
        for index, size in enumerate(sizes):
            if cancel_event is not None and cancel_event.is_set():
                remaining = count - len(outcomes)
                logger.warning(f"Run cancelled before batch {index + 1}/{len(sizes)}; skipping {remaining} orders")
                outcomes.extend(Cancelled() for _ in range(remaining))
                break

            batch_outcomes = await self._run_batch(size, customers, products, cancel_event)
            outcomes.extend(batch_outcomes)
            logger.info(f"Batch {index + 1}/{len(sizes)} completed.")

            if on_batch_complete is not None:
                on_batch_complete(index, len(sizes), batch_outcomes)

            if index < len(sizes) - 1:
                logger.info(f"Waiting for {delay} seconds before next batch...")
                await sleep_unless_cancelled(self.sleep, delay, cancel_event)

        report = aggregate(outcomes)
        log_summary(report)
        return report

    async def _run_batch(self, size: int, customers, products, cancel_event=None) -> List[SubmissionOutcome]:
        """Fan out `size` units and wait for all of them"""
        results = await asyncio.gather(
            *(self._run_unit(customers, products, cancel_event) for _ in range(size)),
            return_exceptions=True
        )

        batch_outcomes = []
        for result in results:
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.error("Unexpected error in order unit", exc_info=result)
                result = TransportFailed(cause=f"Unexpected error: {result}", attempts=0)
            batch_outcomes.append(result)
        return batch_outcomes

    async def _run_unit(self, customers, products, cancel_event=None) -> SubmissionOutcome:
        """Synthesize then submit one order"""
        try:
            request = self.synthesizer.synthesize(customers, products)
        except InsufficientReferenceData as e:
            logger.warning(f"Cannot synthesize order: {e}")
            return SynthesisFailed(reason=str(e))

        return await self.submitter.submit(
            request,
            regenerate=lambda: self.synthesizer.synthesize(customers, products),
            cancel_event=cancel_event
        )
