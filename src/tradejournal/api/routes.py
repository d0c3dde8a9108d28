"""Trade and metrics endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response, status

from tradejournal.core.models import EXPORT_FILENAME, TradeRecord
from tradejournal.storage.store import TradeStore

router = APIRouter(prefix="/api", tags=["Trades"])


def get_store(request: Request) -> TradeStore:
    """Get the store attached to the running application."""
    return request.app.state.store


@router.get("/trades")
def list_trades(store: TradeStore = Depends(get_store)) -> list[Any]:
    """List all trades in stored order."""
    return store.list_trades()


@router.post("/trades", status_code=status.HTTP_201_CREATED)
def create_trade(
    trade: dict[str, Any] = Body(...),
    store: TradeStore = Depends(get_store),
) -> TradeRecord:
    """Create a trade; the server assigns ``id`` and ``createdAt``."""
    return store.create_trade(trade)


@router.put("/trades/{trade_id}")
def update_trade(
    trade_id: str,
    changes: dict[str, Any] = Body(...),
    store: TradeStore = Depends(get_store),
) -> TradeRecord:
    """Merge fields into an existing trade."""
    return store.update_trade(trade_id, changes)


@router.delete("/trades/{trade_id}")
def delete_trade(trade_id: str, store: TradeStore = Depends(get_store)) -> dict:
    store.delete_trade(trade_id)
    return {"success": True}


@router.get("/metrics")
def get_metrics(store: TradeStore = Depends(get_store)) -> dict[str, Any]:
    """Get journal summary statistics."""
    return store.get_metrics().to_dict()


@router.get("/export")
def export_trades(store: TradeStore = Depends(get_store)) -> Response:
    """Download every trade as an indented JSON attachment."""
    return Response(
        content=store.export_trades(),
        media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )


@router.post("/import")
def import_trades(
    payload: Any = Body(...),
    store: TradeStore = Depends(get_store),
) -> dict:
    """Replace every trade with the posted array."""
    count = store.import_trades(payload)
    return {"success": True, "count": count}
