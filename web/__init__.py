"""Local web API for the honk plate ledger."""

__version__ = "1.0.0"
