"""
Domain Layer - Business Entities

This layer contains Pydantic models for reference data, order requests
and submission outcomes. All of them are immutable once built.

Author: TM3
Date: 2026-10-18
"""
from order_seeder.domain.reference import Customer, Product, Variant
from order_seeder.domain.order import LineItem, OrderRequest, Transaction
from order_seeder.domain.outcome import (
    BatchReport,
    Cancelled,
    FieldError,
    RejectedByServer,
    ReportSummary,
    SubmissionOutcome,
    Succeeded,
    SynthesisFailed,
    TransportFailed,
)

__all__ = [
    'Customer', 'Product', 'Variant',
    'LineItem', 'OrderRequest', 'Transaction',
    'BatchReport', 'Cancelled', 'FieldError', 'RejectedByServer', 'ReportSummary',
    'SubmissionOutcome', 'Succeeded', 'SynthesisFailed', 'TransportFailed',
]
