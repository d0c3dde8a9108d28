"""Storage module for persisting journal trades."""

from tradejournal.storage.store import TradeStore, get_trade_store

__all__ = ["TradeStore", "get_trade_store"]
