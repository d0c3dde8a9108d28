"""Core domain types, errors and metrics."""

from tradejournal.core.errors import (
    InvalidInputError,
    StorageError,
    StorageReadError,
    StorageWriteError,
    TradeJournalError,
    TradeNotFoundError,
)
from tradejournal.core.metrics import TradeMetrics, compute_metrics
from tradejournal.core.models import RESERVED_FIELDS, TradeRecord

__all__ = [
    "InvalidInputError",
    "RESERVED_FIELDS",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "TradeJournalError",
    "TradeMetrics",
    "TradeNotFoundError",
    "TradeRecord",
    "compute_metrics",
]
