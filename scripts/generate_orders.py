#!/usr/bin/env python3
"""
Generate Orders - seed a Shopify store with synthetic orders

Usage:
    python scripts/generate_orders.py 20
    python scripts/generate_orders.py 12 --batch-size 5 --delay 10 --seed 42

Author: TM3
Date: 2026-10-18
"""
import argparse
import asyncio
import json
import logging
import random
import signal
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from order_seeder.connectors.shopify_connector import ShopifyConnector
from order_seeder.core.config import settings
from order_seeder.core.exceptions import InvalidRequest
from order_seeder.services.order_generation_service import OrderGenerationService

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)
logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Create synthetic orders in Shopify")
    parser.add_argument("count", type=int, help="Number of orders to create")
    parser.add_argument("--batch-size", type=int, default=None,
                        help=f"Orders per batch (default: {settings.DEFAULT_BATCH_SIZE})")
    parser.add_argument("--delay", type=float, default=None,
                        help=f"Seconds between batches (default: {settings.DEFAULT_BATCH_DELAY_SECONDS})")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible payloads")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON")
    return parser.parse_args(argv)


def install_cancel_handler(loop, cancel_event):
    """
    First Ctrl+C requests a graceful stop (no new batches, no further
    retries); the handler then uninstalls itself so a second Ctrl+C
    raises KeyboardInterrupt and aborts immediately.
    """
    def on_sigint():
        logger.warning("Cancelling: finishing in-flight requests. Press Ctrl+C again to abort")
        cancel_event.set()
        loop.remove_signal_handler(signal.SIGINT)

    try:
        loop.add_signal_handler(signal.SIGINT, on_sigint)
    except NotImplementedError:
        # Windows event loops don't support signal handlers
        pass


async def generate(args) -> bool:
    """Run one generation; Ctrl+C stops after the current batch, twice aborts"""
    connector = ShopifyConnector()

    test_result = await connector.test_connection()
    if not test_result['success']:
        logger.error(f"Connection failed: {test_result.get('error')}")
        return False
    logger.info(f"Connected to {test_result['shop_name']}")

    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    install_cancel_handler(loop, cancel_event)

    rng = random.Random(args.seed) if args.seed is not None else None
    service = OrderGenerationService(connector, rng=rng)

    def on_batch_complete(index, total, outcomes):
        created = sum(1 for o in outcomes if o.status == 'succeeded')
        print(f"  batch {index + 1}/{total}: {created}/{len(outcomes)} created")

    try:
        report = await service.generate(
            args.count,
            batch_size=args.batch_size,
            inter_batch_delay=args.delay,
            cancel_event=cancel_event,
            on_batch_complete=on_batch_complete
        )
    except InvalidRequest as e:
        logger.error(str(e))
        return False

    summary = report.summary()
    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(f"\nCreated {summary.succeeded}/{summary.total} orders "
              f"({summary.rejected} rejected, {summary.transport_failed} transport failures, "
              f"{summary.synthesis_failed} synthesis failures, {summary.cancelled} cancelled)")
        for order_id in report.order_ids:
            print(f"   • {order_id}")

    return summary.succeeded == summary.total


if __name__ == "__main__":
    success = asyncio.run(generate(parse_args()))
    sys.exit(0 if success else 1)
