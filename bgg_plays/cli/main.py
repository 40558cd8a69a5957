"""
Main CLI entry point for BGG Plays package.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import DATABASE_NAME, MONGO_URI
from ..database import BGGPlayCollector, MongoConnection, PlayDataStore
from ..error_handling import StorageUnavailable
from ..logging_config import run_log_file, setup_logging
from ..models import Play, SyncResult
from ..sync import PlaySynchronizer

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive game id, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Track board game plays in MongoDB")
    parser.add_argument("--uri", default=MONGO_URI, help="MongoDB connection string")
    parser.add_argument("--database", default=DATABASE_NAME, help="Database name")
    parser.add_argument("--log-file", type=str, default=None, help="Custom log file name or absolute path")
    parser.add_argument("--verbose", action="store_true", help="Log every database write")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("games", help="List stored board games")

    count = commands.add_parser("count", help="Count stored plays for a game")
    count.add_argument("game_id", type=int)

    # Zero or negative ids would match broadly; only the store itself accepts them
    delete = commands.add_parser("delete", help="Delete every stored play for a game")
    delete.add_argument("game_id", type=positive_int)

    status = commands.add_parser("status", help="Show the synchronisation status for a game")
    status.add_argument("game_id", type=int)

    import_ = commands.add_parser("import", help="Upsert plays from a JSON file of play documents")
    import_.add_argument("path", type=Path)

    sync = commands.add_parser("sync", help="Synchronise plays from BGG")
    sync.add_argument("game_ids", type=int, nargs="*", help="Games to sync (default: every stored game)")
    sync.add_argument("--delay", type=float, default=None, help="Seconds to wait between API requests")
    return parser


def load_plays(path: Path) -> List[Play]:
    """Read a JSON list of play documents."""
    with open(path, encoding="utf-8") as f:
        docs = json.load(f)
    return [Play.from_document(doc) for doc in docs]


def print_sync_results(results: List[SyncResult]) -> None:
    print("\n" + "="*60)
    print("SYNC RESULTS")
    print("="*60)
    for result in results:
        if not result.success:
            print(f"✗ FAILED  | {result.game_id}")
            print(f"  └─ Error: {result.error_message}")
        elif result.skipped:
            print(f"- CURRENT | {result.game_id} | {result.remote_total} plays")
        else:
            print(f"✓ SYNCED  | {result.game_id} | {result.plays_written} plays written")
            if result.deleted:
                print(f"  └─ Removed {result.stored_before} stale plays first")
    print("="*60)


async def run_command(args: argparse.Namespace, connection: MongoConnection) -> int:
    """Run one CLI command against an open connection and return the exit code."""
    store = PlayDataStore(connection, args.database)

    if args.command == "games":
        games = await store.list_board_games()
        if not games:
            print("No board games found in database")
        for game in games:
            object_id = game.object_id if game.object_id is not None else "-"
            print(f"{object_id:>8} | {game.name}")

    elif args.command == "count":
        print(await store.count_plays(args.game_id))

    elif args.command == "delete":
        await store.delete_plays_for(args.game_id)
        print(f"Removed all plays for {args.game_id}")

    elif args.command == "status":
        status = await store.get_board_game_status(args.game_id)
        if status is None:
            print(f"No status recorded for {args.game_id}")
        else:
            print(f"{status.object_id}: {status.play_count} plays in {status.pages} page(s)")

    elif args.command == "import":
        try:
            plays = load_plays(args.path)
        except (OSError, ValueError, KeyError, TypeError) as e:
            print(f"Could not read plays from {args.path}: {e!r}")
            return 1
        await store.insert_plays(plays)
        print(f"Stored {len(plays)} plays from {args.path}")

    elif args.command == "sync":
        collector = BGGPlayCollector() if args.delay is None else BGGPlayCollector(delay_seconds=args.delay)
        synchronizer = PlaySynchronizer(store, collector)
        if args.game_ids:
            results = await synchronizer.sync_games(args.game_ids)
        else:
            results = await synchronizer.sync_all()
        print_sync_results(results)
        if any(not r.success for r in results):
            return 1

    return 0


async def _run(args: argparse.Namespace) -> int:
    async with MongoConnection(args.uri) as connection:
        return await run_command(args, connection)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_file or run_log_file(args.command), verbose_store=args.verbose)

    try:
        return asyncio.run(_run(args))
    except StorageUnavailable as e:
        print(f"\nMongoDB is unavailable: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nProcess interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Unexpected error in main: {e}")
        raise


if __name__ == "__main__":
    sys.exit(main())
