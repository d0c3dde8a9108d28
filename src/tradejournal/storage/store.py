"""JSON document storage for journal trades."""

from __future__ import annotations

import csv
import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from loguru import logger

from tradejournal.core.errors import (
    InvalidInputError,
    StorageReadError,
    StorageWriteError,
    TradeNotFoundError,
)
from tradejournal.core.metrics import TradeMetrics, compute_metrics
from tradejournal.core.models import (
    CREATED_AT_FIELD,
    ID_FIELD,
    RESERVED_FIELDS,
    TradeRecord,
    next_trade_id,
    utc_timestamp,
)

# Default document path
DEFAULT_TRADES_PATH = Path.home() / ".tradejournal" / "trades.json"


class TradeStore:
    """Trade collection persisted as a single JSON array.

    The document is the only source of truth: every operation reloads it and
    every mutation rewrites it in full. Mutations are serialized through one
    lock so concurrent requests cannot lose each other's writes.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        """Initialize the trade store.

        Args:
            path: Path to the JSON document. Defaults to ~/.tradejournal/trades.json
        """
        self.path = Path(path) if path else DEFAULT_TRADES_PATH
        self._write_lock = threading.Lock()
        self._init_document()

    def _init_document(self) -> None:
        """Create an empty document if none exists."""
        if self.path.exists():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageWriteError(f"Cannot create {self.path.parent}: {e}") from e
        self._save([])
        logger.info(f"Created empty trades document at {self.path}")

    def _load(self) -> list[TradeRecord]:
        """Read and parse the whole document."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageReadError(f"Cannot read {self.path}: {e}") from e

        try:
            trades = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageReadError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(trades, list):
            raise StorageReadError(
                f"Expected a JSON array in {self.path}, got {type(trades).__name__}"
            )

        logger.debug(f"Loaded {len(trades)} trades from {self.path}")
        return trades

    def _save(self, trades: list[Any]) -> None:
        """Replace the document atomically."""
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(trades, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise StorageWriteError(f"Cannot write {self.path}: {e}") from e

        logger.debug(f"Saved {len(trades)} trades to {self.path}")

    @contextmanager
    def _transaction(self) -> Iterator[list[TradeRecord]]:
        """Load the collection under the write lock and save it on success."""
        with self._write_lock:
            trades = self._load()
            yield trades
            self._save(trades)

    # ==================== CRUD ====================

    def list_trades(self) -> list[TradeRecord]:
        """Get every trade in stored order."""
        return self._load()

    def create_trade(self, record: TradeRecord) -> TradeRecord:
        """Append a new trade.

        Any caller-supplied ``id`` or ``createdAt`` is overwritten.

        Args:
            record: Trade fields

        Returns:
            The stored trade including its assigned id and timestamp
        """
        with self._transaction() as trades:
            trade = dict(record)
            trade[ID_FIELD] = next_trade_id(trades)
            trade[CREATED_AT_FIELD] = utc_timestamp()
            trades.append(trade)

        logger.info(f"Created trade {trade[ID_FIELD]}")
        return trade

    def update_trade(self, trade_id: str, changes: TradeRecord) -> TradeRecord:
        """Merge fields into an existing trade.

        Args:
            trade_id: Id of the trade to update
            changes: Fields to overwrite; fields not named are kept

        Returns:
            The merged trade

        Raises:
            TradeNotFoundError: No trade has this id. Nothing is written.
        """
        with self._write_lock:
            trades = self._load()
            index = next(
                (
                    i
                    for i, t in enumerate(trades)
                    if isinstance(t, dict) and t.get(ID_FIELD) == trade_id
                ),
                None,
            )
            if index is None:
                raise TradeNotFoundError(trade_id)

            trades[index] = {**trades[index], **changes}
            self._save(trades)

        logger.info(f"Updated trade {trade_id}")
        return trades[index]

    def delete_trade(self, trade_id: str) -> int:
        """Remove every trade with the given id.

        Args:
            trade_id: Id of the trade to delete

        Returns:
            Number of trades removed (0 is not an error)
        """
        with self._transaction() as trades:
            before = len(trades)
            trades[:] = [
                t for t in trades if not (isinstance(t, dict) and t.get(ID_FIELD) == trade_id)
            ]
            removed = before - len(trades)

        logger.info(f"Deleted trade {trade_id} ({removed} removed)")
        return removed

    # ==================== Backup ====================

    def export_trades(self) -> str:
        """Serialize the collection as indented JSON for download."""
        trades = self._load()
        logger.info(f"Exported {len(trades)} trades")
        return json.dumps(trades, ensure_ascii=False, indent=2)

    def import_trades(self, payload: Any) -> int:
        """Replace the whole collection.

        Args:
            payload: New collection; must be a list

        Returns:
            Number of trades now stored

        Raises:
            InvalidInputError: Payload is not a list. Nothing is written.
        """
        if not isinstance(payload, list):
            raise InvalidInputError("Payload must be an array of trades")

        with self._write_lock:
            self._save(payload)

        logger.info(f"Imported {len(payload)} trades")
        return len(payload)

    def export_trades_csv(self, filepath: Path | str) -> int:
        """Export trades to CSV file.

        Columns are the reserved fields followed by every other field in the
        order it first appears.

        Args:
            filepath: Output file path

        Returns:
            Number of trades exported
        """
        filepath = Path(filepath)
        trades = [t for t in self._load() if isinstance(t, dict)]

        if not trades:
            logger.warning("No trades to export")
            return 0

        fieldnames = list(RESERVED_FIELDS)
        for trade in trades:
            for key in trade:
                if key not in fieldnames:
                    fieldnames.append(key)

        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
            writer.writeheader()
            writer.writerows(trades)

        logger.info(f"Exported {len(trades)} trades to {filepath}")
        return len(trades)

    # ==================== Metrics ====================

    def get_metrics(self) -> TradeMetrics:
        """Compute summary statistics over all trades."""
        # Imported entries that are not objects still count as trades
        return compute_metrics([t if isinstance(t, dict) else {} for t in self._load()])


# Global store instance
_store: TradeStore | None = None


def get_trade_store(path: Path | str | None = None) -> TradeStore:
    """Get the global trade store instance.

    Args:
        path: Optional custom document path

    Returns:
        TradeStore instance
    """
    global _store
    if _store is None or path is not None:
        _store = TradeStore(path)
    return _store
