"""
Submission Outcome Domain Models

One SubmissionOutcome is produced per requested order (after retries).
Failures are represented, never dropped, so a BatchReport always has
exactly as many entries as orders were requested.

Author: TM3
Date: 2026-10-18
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Annotated, List, Literal, Optional, Tuple, Union


class FieldError(BaseModel):
    """A single entry of the orderCreate `userErrors` list"""

    field: Optional[List[str]] = Field(None, description="Path of the offending input field")
    message: str = Field(..., description="Error message")

    model_config = ConfigDict(frozen=True)


class Succeeded(BaseModel):
    """Order created in Shopify"""

    status: Literal['succeeded'] = 'succeeded'
    order_id: str = Field(..., description="Created order GID")
    attempts: int = Field(1, description="Remote calls made for this unit", ge=1)

    model_config = ConfigDict(frozen=True)


class RejectedByServer(BaseModel):
    """Shopify answered with userErrors (business-rule rejection)"""

    status: Literal['rejected'] = 'rejected'
    field_errors: Tuple[FieldError, ...] = Field(default_factory=tuple, description="userErrors")
    attempts: int = Field(1, ge=1)

    model_config = ConfigDict(frozen=True)


class TransportFailed(BaseModel):
    """The remote call never produced a structured answer"""

    status: Literal['transport_failed'] = 'transport_failed'
    cause: str = Field(..., description="Error description")
    rate_limited: bool = Field(False, description="Last failure was throttling")
    attempts: int = Field(1, ge=0)

    model_config = ConfigDict(frozen=True)


class SynthesisFailed(BaseModel):
    """No valid payload could be built from the reference data"""

    status: Literal['synthesis_failed'] = 'synthesis_failed'
    reason: str = Field(..., description="Why synthesis failed")

    model_config = ConfigDict(frozen=True)


class Cancelled(BaseModel):
    """Unit never started because the run was cancelled"""

    status: Literal['cancelled'] = 'cancelled'

    model_config = ConfigDict(frozen=True)


SubmissionOutcome = Annotated[
    Union[Succeeded, RejectedByServer, TransportFailed, SynthesisFailed, Cancelled],
    Field(discriminator='status'),
]


class ReportSummary(BaseModel):
    """Counts per outcome kind"""

    total: int = 0
    succeeded: int = 0
    rejected: int = 0
    transport_failed: int = 0
    synthesis_failed: int = 0
    cancelled: int = 0


class BatchReport(BaseModel):
    """
    Ordered outcomes of one generation run

    Outcomes are stored in batch-emission order. Within a batch, units run
    concurrently, so ordering between them carries no meaning.
    """

    outcomes: Tuple[SubmissionOutcome, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)

    @property
    def order_ids(self) -> List[str]:
        """GIDs of all orders that were created"""
        return [o.order_id for o in self.outcomes if isinstance(o, Succeeded)]

    def summary(self) -> ReportSummary:
        counts = {
            'succeeded': 0,
            'rejected': 0,
            'transport_failed': 0,
            'synthesis_failed': 0,
            'cancelled': 0,
        }
        for outcome in self.outcomes:
            counts[outcome.status] += 1
        return ReportSummary(total=len(self.outcomes), **counts)

    def to_dict(self) -> dict:
        """Serialize as ordered per-unit records plus summary"""
        return {
            'summary': self.summary().model_dump(),
            'outcomes': [outcome.model_dump() for outcome in self.outcomes],
        }
