"""Trade journal backend: JSON-file trade store with an HTTP API."""

__version__ = "0.1.0"
