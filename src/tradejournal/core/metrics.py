"""Summary statistics over the trade collection."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from tradejournal.core.models import (
    RESULT_FIELD,
    STATUS_FIELD,
    STATUS_LOSS,
    STATUS_WIN,
    TradeRecord,
)

Number = int | float


@dataclass(frozen=True)
class TradeMetrics:
    """Aggregate statistics for the journal."""

    total_trades: int = 0
    win_trades: int = 0
    loss_trades: int = 0
    win_rate: float = 0
    total_pl: Number = 0
    avg_win: Number = 0
    avg_loss: Number = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the API's camelCase keys."""
        return {
            "totalTrades": self.total_trades,
            "winTrades": self.win_trades,
            "lossTrades": self.loss_trades,
            "winRate": self.win_rate,
            "totalPl": self.total_pl,
            "avgWin": self.avg_win,
            "avgLoss": self.avg_loss,
        }


def trade_result(trade: TradeRecord) -> Number:
    """Get a trade's profit/loss, treating missing, non-numeric or non-finite values as 0."""
    value = trade.get(RESULT_FIELD)
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return value
    return 0


def compute_metrics(trades: list[TradeRecord]) -> TradeMetrics:
    """Compute journal metrics.

    ``loss_trades`` is everything that is not a win, so records with an
    unknown status count towards it. ``avg_loss`` only sums records whose
    status is literally ``"loss"`` but divides by ``loss_trades``.

    Args:
        trades: Trade records in stored order

    Returns:
        TradeMetrics for the collection
    """
    total_trades = len(trades)
    wins = [t for t in trades if t.get(STATUS_FIELD) == STATUS_WIN]
    losses = [t for t in trades if t.get(STATUS_FIELD) == STATUS_LOSS]

    win_trades = len(wins)
    loss_trades = total_trades - win_trades

    win_rate = round(win_trades / total_trades * 100, 1) if total_trades > 0 else 0
    total_pl = sum(trade_result(t) for t in trades)

    avg_win = sum(trade_result(t) for t in wins) / win_trades if win_trades > 0 else 0
    avg_loss = (
        sum(trade_result(t) for t in losses) / loss_trades if loss_trades > 0 else 0
    )

    return TradeMetrics(
        total_trades=total_trades,
        win_trades=win_trades,
        loss_trades=loss_trades,
        win_rate=win_rate,
        total_pl=total_pl,
        avg_win=avg_win,
        avg_loss=avg_loss,
    )
