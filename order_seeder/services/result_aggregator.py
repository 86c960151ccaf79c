"""
Result Aggregator - packages per-unit outcomes into a BatchReport
"""
import logging
from typing import Iterable

from order_seeder.domain.outcome import BatchReport, SubmissionOutcome

logger = logging.getLogger(__name__)


def aggregate(outcomes: Iterable[SubmissionOutcome]) -> BatchReport:
    """Build a report preserving emission order. Pure and total."""
    return BatchReport(outcomes=tuple(outcomes))


def log_summary(report: BatchReport) -> None:
    summary = report.summary()
    logger.info(
        f"Order generation finished: {summary.succeeded}/{summary.total} created, "
        f"{summary.rejected} rejected, {summary.transport_failed} transport failures, "
        f"{summary.synthesis_failed} synthesis failures, {summary.cancelled} cancelled"
    )
