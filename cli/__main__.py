"""
Entry point for running honk as a module.

Usage:
    python -m cli vote ABC123 --up
    python -m cli leaderboard --limit 10
    python -m cli reset
    python -m cli profile set "Road Watcher"
"""

import asyncio
from .commands import main

if __name__ == "__main__":
    asyncio.run(main())
