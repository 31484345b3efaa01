"""Command-line client for the honk plate ledger."""
