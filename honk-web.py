#!/usr/bin/env python3
"""
honk — Web API

Starts a local web server exposing the vote, leaderboard, reset and profile
endpoints. This is an alternative to the CLI (honk.py); both share the same
data directory and database image.

Usage:
    python honk-web.py [--port 8000] [--host 127.0.0.1]
"""

from web.__main__ import main


if __name__ == "__main__":
    main()
