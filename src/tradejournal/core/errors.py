"""Error types raised by the trade store.

Every error carries the HTTP status it maps to and a message that is safe to
show to a client. Storage errors keep the underlying detail in ``str(exc)``
for the logs while clients only see the generic ``public_message``.
"""

from __future__ import annotations


class TradeJournalError(Exception):
    """Base class for trade journal errors."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)


class StorageError(TradeJournalError):
    """The trades document could not be read or written."""


class StorageReadError(StorageError):
    """The trades document is missing, unreadable or not a JSON array."""

    public_message = "Failed to load trades"


class StorageWriteError(StorageError):
    """The trades document could not be written."""

    public_message = "Failed to save trades"


class TradeNotFoundError(TradeJournalError):
    """No trade with the requested id exists."""

    status_code = 404
    public_message = "Trade not found"

    def __init__(self, trade_id: str) -> None:
        self.trade_id = trade_id
        super().__init__(f"Trade {trade_id} not found")


class InvalidInputError(TradeJournalError):
    """A request payload has the wrong shape."""

    status_code = 400
    public_message = "Invalid input"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message)
        if message:
            self.public_message = message
