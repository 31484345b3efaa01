"""
CLI subcommand implementations for honk.

Subcommands::

    honk vote PLATE --up | --down
    honk leaderboard [--limit N]
    honk reset [--yes]
    honk profile show
    honk profile set NAME
    honk profile clear

Every command boots the ledger from the data directory (``HONK_DATA_DIR``
or the platform default) and closes it, which writes the snapshot.
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

from honk_platform import HonkError, HonkFacade
from honk_platform.models import LeaderboardEntry
from honk_platform.persistence import FileBlobStore
from honk_platform.runtime.config import LEADERBOARD_LIMIT, get_data_dir
from honk_platform.services import ProfileStore


async def _boot() -> HonkFacade:
    return await HonkFacade.boot(FileBlobStore(get_data_dir()))


# ---------------------------------------------------------------------------
# Subcommand: vote
# ---------------------------------------------------------------------------

async def cmd_vote(args):
    """Record one vote against a plate."""
    value = 1 if args.up else -1
    facade = await _boot()
    try:
        receipt = await facade.record_vote(args.plate, value)
    except HonkError as e:
        # Rejected before any row changed; nothing to write.
        await facade.close(persist=False)
        print(f"Error: {e}")
        sys.exit(1)
    await facade.close()

    vote = receipt.vote
    print(f"Recorded {vote.value:+d} for {vote.plate_text} (score {vote.score})")
    if not receipt.persisted:
        print("Warning: vote kept in memory only; the local snapshot could not be saved.")


# ---------------------------------------------------------------------------
# Subcommand: leaderboard
# ---------------------------------------------------------------------------

async def cmd_leaderboard(args):
    """Print the best and worst plates."""
    facade = await _boot()
    try:
        board = facade.leaderboard(args.limit)
    except HonkError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        await facade.close(persist=False)

    print("\nMost upvoted:")
    _print_entries(board.best, "No positive scores yet.")
    print("\nMost downvoted:")
    _print_entries(board.worst, "No negative scores yet.")


def _print_entries(entries: list[LeaderboardEntry], empty_message: str):
    if not entries:
        print(f"  {empty_message}")
        return
    for i, entry in enumerate(entries, start=1):
        print(f"  {i:>3}. {entry.plate_text:<12} {entry.score:+d}")


# ---------------------------------------------------------------------------
# Subcommand: reset
# ---------------------------------------------------------------------------

async def cmd_reset(args):
    """Wipe the local database after confirmation."""
    if not args.yes:
        try:
            confirm = input("Reset local database? This cannot be undone. (y/N): ")
        except (EOFError, KeyboardInterrupt):
            return
        if confirm.strip().lower() not in ('y', 'yes'):
            print("Cancelled.")
            return

    facade = await _boot()
    try:
        persisted = await facade.reset()
    finally:
        await facade.close()

    print("✓ Local DB reset.")
    if not persisted:
        print("Warning: the empty database could not be saved; it will be retried on next write.")


# ---------------------------------------------------------------------------
# Subcommand: profile
# ---------------------------------------------------------------------------

async def cmd_profile(args):
    """Show, set or clear the device-local display name."""
    # The profile lives under its own key; the database is not opened.
    profiles = ProfileStore(FileBlobStore(get_data_dir()))
    action = args.profile_action

    try:
        if action == 'show':
            name = await profiles.get_display_name()
            print(f"Signed in as: {name}" if name else "Not signed in")
        elif action == 'set':
            name = await profiles.set_display_name(args.name)
            print(f"✓ Signed in as: {name}")
        elif action == 'clear':
            await profiles.clear()
            print("✓ Signed out.")
    except HonkError as e:
        print(f"Error: {e}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="honk",
        description="Vote on license plates and view local leaderboards",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- vote ---
    p_vote = subparsers.add_parser("vote", help="Record a vote against a plate")
    p_vote.add_argument("plate", help="License plate text")
    direction = p_vote.add_mutually_exclusive_group(required=True)
    direction.add_argument("--up", action="store_true", help="Vote +1")
    direction.add_argument("--down", action="store_true", help="Vote -1")

    # --- leaderboard ---
    p_board = subparsers.add_parser("leaderboard", help="Show the best and worst plates")
    p_board.add_argument(
        "--limit", type=int, default=LEADERBOARD_LIMIT,
        help=f"Rows per list (default: {LEADERBOARD_LIMIT})",
    )

    # --- reset ---
    p_reset = subparsers.add_parser("reset", help="Delete all plates and votes")
    p_reset.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    # --- profile ---
    p_profile = subparsers.add_parser("profile", help="Manage the local display name")
    sp_profile = p_profile.add_subparsers(dest="profile_action", required=True)
    sp_profile.add_parser("show", help="Show the display name")
    sp_set = sp_profile.add_parser("set", help="Set the display name")
    sp_set.add_argument("name", help="Display name")
    sp_profile.add_parser("clear", help="Forget the display name")

    return parser


async def main(argv: list[str] | None = None):
    """Entry point for the CLI."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == 'vote':
        await cmd_vote(args)
    elif args.command == 'leaderboard':
        await cmd_leaderboard(args)
    elif args.command == 'reset':
        await cmd_reset(args)
    elif args.command == 'profile':
        await cmd_profile(args)
