"""Trade record conventions shared by the store and the API."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

# A trade is an open JSON object; only a few keys carry meaning for the store.
TradeRecord = dict[str, Any]

ID_FIELD = "id"
CREATED_AT_FIELD = "createdAt"
STATUS_FIELD = "status"
RESULT_FIELD = "result"

# Always assigned by the store on create
RESERVED_FIELDS = (ID_FIELD, CREATED_AT_FIELD)

STATUS_WIN = "win"
STATUS_LOSS = "loss"

EXPORT_FILENAME = "trades-backup.json"


def utc_timestamp(now: datetime | None = None) -> str:
    """Format a time as ISO-8601 UTC with millisecond precision.

    >>> utc_timestamp(datetime(2024, 1, 15, 9, 30, tzinfo=UTC))
    '2024-01-15T09:30:00.000Z'
    """
    if now is None:
        now = datetime.now(UTC)
    return now.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _numeric_id(trade: object) -> int | None:
    """Get a trade's id as an int when it is a plain ASCII decimal string."""
    if not isinstance(trade, dict):
        return None
    value = trade.get(ID_FIELD)
    if not (isinstance(value, str) and value.isascii() and value.isdecimal()):
        return None
    try:
        return int(value)
    except ValueError:
        # Longer than the interpreter's int conversion limit
        return None


def next_trade_id(trades: list[TradeRecord], now: datetime | None = None) -> str:
    """Generate an id from the current epoch milliseconds.

    The id is bumped past every numeric id already in ``trades`` so ids stay
    unique and increase with creation order, even for several creates within
    one millisecond.
    """
    if now is None:
        now = datetime.now(UTC)
    candidate = int(now.timestamp() * 1000)

    highest = max(
        (n for n in map(_numeric_id, trades) if n is not None),
        default=None,
    )
    if highest is not None and candidate <= highest:
        candidate = highest + 1
    return str(candidate)
