"""HTTP API for the trade journal."""

from tradejournal.api.app import create_app

__all__ = ["create_app"]
