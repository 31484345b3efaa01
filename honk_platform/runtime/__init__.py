"""Runtime configuration for the honk platform layer."""
