"""
Order Submitter - one orderCreate call per unit of work, with bounded retry

Retry rules (see RetryPolicy):
- Throttling (HTTP 429 / THROTTLED) and other transport failures are retried
  with exponential backoff until the retry budget is spent, then recorded as
  TransportFailed.
- userErrors (validation rejection) are terminal unless the policy enables
  validation retries explicitly.
- When a `regenerate` callable is given, every retry sends a NEW random
  order instead of the same payload.
- A set cancel event cuts any backoff short; the unit then ends with the
  last failure and no further orderCreate call is made.

NOTE: orderCreate is not idempotent. If Shopify created the order but the
response was lost (timeout, 5xx), the retry creates a second order. Seed runs
may therefore contain duplicates; nothing here tries to detect them.

Author: TM3
Date: 2026-10-18
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional

import httpx

from order_seeder.core.config import Settings, settings as default_settings
from order_seeder.core.exceptions import (
    InsufficientReferenceData,
    ShopifyRateLimitError,
    ShopifyTransportError,
)
from order_seeder.domain.order import OrderRequest
from order_seeder.domain.outcome import (
    FieldError,
    RejectedByServer,
    SubmissionOutcome,
    Succeeded,
    SynthesisFailed,
    TransportFailed,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 3
    backoff_seconds: float = 60.0
    backoff_multiplier: float = 2.0
    max_backoff_seconds: float = 300.0
    retry_transport_errors: bool = True
    retry_validation_errors: bool = False
    validation_retry_delay: float = 1.0
    max_validation_retries: int = 1

    @classmethod
    def from_settings(cls, config: Settings = None) -> "RetryPolicy":
        config = config or default_settings
        return cls(
            max_retries=config.MAX_RATE_LIMIT_RETRIES,
            backoff_seconds=config.RATE_LIMIT_BACKOFF_SECONDS,
            backoff_multiplier=config.RATE_LIMIT_BACKOFF_MULTIPLIER,
            max_backoff_seconds=config.MAX_BACKOFF_SECONDS,
            retry_transport_errors=config.RETRY_TRANSPORT_ERRORS,
            retry_validation_errors=config.RETRY_VALIDATION_ERRORS,
            validation_retry_delay=config.VALIDATION_RETRY_DELAY_SECONDS,
            max_validation_retries=config.MAX_VALIDATION_RETRIES,
        )

    def backoff_for(self, retry: int, retry_after: Optional[float] = None) -> float:
        """
        Delay before the n-th retry (1-based)

        The cap only bounds our own exponential schedule. A longer
        Retry-After from Shopify always wins, since retrying earlier
        would just be throttled again.
        """
        delay = min(self.backoff_seconds * (self.backoff_multiplier ** (retry - 1)),
                    self.max_backoff_seconds)
        if retry_after is not None:
            delay = max(delay, retry_after)
        return delay


async def sleep_unless_cancelled(sleep: Callable[[float], Awaitable[None]], delay: float,
                                 cancel_event: Optional[asyncio.Event] = None) -> bool:
    """
    Sleep for `delay` seconds, waking early if `cancel_event` is set

    Returns:
        True if the event was set (the caller should stop), else False
    """
    if cancel_event is None:
        await sleep(delay)
        return False
    if cancel_event.is_set():
        return True

    sleeper = asyncio.ensure_future(sleep(delay))
    waiter = asyncio.ensure_future(cancel_event.wait())
    _, pending = await asyncio.wait({sleeper, waiter}, return_when=asyncio.FIRST_COMPLETED)
    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)
    return cancel_event.is_set()


class OrderSubmitter:
    """
    Wraps connector.create_order with error classification and retry

    Args:
        connector: Object exposing `async create_order(OrderRequest) -> dict`
        policy: Retry policy (defaults from Settings)
        sleep: Awaitable sleep function, injectable for tests
    """

    def __init__(self, connector, policy: RetryPolicy = None,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.connector = connector
        self.policy = policy or RetryPolicy.from_settings()
        self.sleep = sleep

    async def submit(self, request: OrderRequest,
                     regenerate: Optional[Callable[[], OrderRequest]] = None,
                     cancel_event: Optional[asyncio.Event] = None) -> SubmissionOutcome:
        """
        Submit one order, retrying per policy

        Args:
            request: First payload to send
            regenerate: Builds a fresh payload for each retry (optional)
            cancel_event: When set during a backoff, no further call is made

        Returns:
            Exactly one SubmissionOutcome for this unit of work
        """
        policy = self.policy
        current = request
        attempts = 0
        transport_retries = 0
        validation_retries = 0

        while True:
            attempts += 1
            try:
                payload = await self.connector.create_order(current)

            except ShopifyRateLimitError as e:
                if transport_retries >= policy.max_retries:
                    logger.error(f"Rate limit retries exhausted after {attempts} attempts: {e}")
                    return TransportFailed(cause=str(e), rate_limited=True, attempts=attempts)
                transport_retries += 1
                delay = policy.backoff_for(transport_retries, e.retry_after)
                logger.warning(
                    f"Rate limit hit. Retry {transport_retries}/{policy.max_retries} "
                    f"in {delay:.1f} seconds..."
                )
                if await sleep_unless_cancelled(self.sleep, delay, cancel_event):
                    logger.warning(f"Run cancelled during backoff after {attempts} attempts")
                    return TransportFailed(cause=f"Cancelled while rate limited: {e}",
                                           rate_limited=True, attempts=attempts)

            except (ShopifyTransportError, httpx.HTTPError) as e:
                if not policy.retry_transport_errors or transport_retries >= policy.max_retries:
                    logger.error(f"Order submission failed after {attempts} attempts: {e}")
                    return TransportFailed(cause=str(e), attempts=attempts)
                transport_retries += 1
                delay = policy.backoff_for(transport_retries)
                logger.warning(
                    f"Transport error: {e}. Retry {transport_retries}/{policy.max_retries} "
                    f"in {delay:.1f} seconds..."
                )
                if await sleep_unless_cancelled(self.sleep, delay, cancel_event):
                    logger.warning(f"Run cancelled during backoff after {attempts} attempts")
                    return TransportFailed(cause=f"Cancelled after transport error: {e}",
                                           attempts=attempts)

            else:
                outcome = self._classify(payload, attempts)
                if isinstance(outcome, Succeeded):
                    logger.info(
                        f"Order created: {outcome.order_id} ({current.total_quantity} units)"
                    )
                if not isinstance(outcome, RejectedByServer):
                    return outcome
                if (not policy.retry_validation_errors
                        or validation_retries >= policy.max_validation_retries):
                    logger.warning(f"Order rejected by Shopify: {self._describe(outcome)}")
                    return outcome
                validation_retries += 1
                logger.warning(
                    f"Order rejected ({self._describe(outcome)}). "
                    f"Retry {validation_retries}/{policy.max_validation_retries} "
                    f"in {policy.validation_retry_delay:.1f} seconds..."
                )
                if await sleep_unless_cancelled(self.sleep, policy.validation_retry_delay, cancel_event):
                    return outcome

            if regenerate is not None:
                try:
                    current = regenerate()
                except InsufficientReferenceData as e:
                    return SynthesisFailed(reason=str(e))

    def _classify(self, payload: Dict, attempts: int) -> SubmissionOutcome:
        """Map an orderCreate payload to an outcome"""
        order = payload.get('order') or {}
        if order.get('id'):
            return Succeeded(order_id=order['id'], attempts=attempts)

        user_errors = payload.get('userErrors') or []
        if user_errors:
            return RejectedByServer(
                field_errors=tuple(
                    FieldError(field=err.get('field'), message=err.get('message') or 'Unknown error')
                    for err in user_errors
                ),
                attempts=attempts
            )

        return TransportFailed(
            cause="orderCreate returned neither an order nor userErrors",
            attempts=attempts
        )

    @staticmethod
    def _describe(outcome: RejectedByServer) -> str:
        return "; ".join(
            f"{'.'.join(err.field) if err.field else '?'}: {err.message}"
            for err in outcome.field_errors
        )
