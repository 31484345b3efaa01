#!/usr/bin/env python3
"""
honk — local license-plate voting

Record +1/-1 votes against license plates and view the most upvoted and
most downvoted plates. Everything is stored on this device.

Usage:
    python honk.py vote ABC123 --up
    python honk.py leaderboard

This file is a thin wrapper around the honk package.
For the implementation, see the honk_platform/, cli/, and web/ directories.
"""

import asyncio
from cli.commands import main

if __name__ == "__main__":
    asyncio.run(main())
