from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from questlog.app import (
    digest_game,
    reconcile_entry,
    resolve_game,
    retrieve_game,
    search_games,
    sync_steam_library,
)
from questlog.config import ConfigurationError, configure_logging
from questlog.domain.errors import QuestlogError, http_status_for

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from pydantic import BaseModel

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve and reconcile game metadata")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    retrieve = subparsers.add_parser(
        "retrieve", help="Print the stored entry for a game, resolving it if missing"
    )
    retrieve.add_argument("game_id", type=int, help="IGDB game id")

    resolve = subparsers.add_parser("resolve", help="Re-resolve a game and store the entry")
    resolve.add_argument("game_id", type=int, help="IGDB game id")

    digest = subparsers.add_parser("digest", help="Print the compact digest of a game")
    digest.add_argument("game_id", type=int, help="IGDB game id")

    search = subparsers.add_parser("search", help="Search the catalog by title")
    search.add_argument("title", type=str, help="Title to search for")
    search.add_argument(
        "--base-game-only",
        action="store_true",
        help="Only return main games, remakes and remasters",
    )

    reconcile = subparsers.add_parser(
        "reconcile", help="Match a storefront entry to catalog games"
    )
    reconcile.add_argument("storefront", type=str, help="Storefront name (steam, gog, egs)")
    reconcile.add_argument("title", type=str, help="Title as listed on the storefront")
    reconcile.add_argument(
        "--store-id",
        type=str,
        default="",
        help="Storefront id of the title, e.g. a Steam appid",
    )

    subparsers.add_parser("sync-steam", help="Reconcile the configured Steam library")

    return parser.parse_args(list(argv))


def _dump(payload: BaseModel | list[BaseModel] | dict[str, Any]) -> None:
    if isinstance(payload, list):
        data: Any = [item.model_dump(mode="json") for item in payload]
    elif isinstance(payload, dict):
        data = payload
    else:
        data = payload.model_dump(mode="json")
    sys.stdout.write(json.dumps(data, indent=2, ensure_ascii=False) + "\n")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    # argparse exits with status 2 on invalid arguments
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "retrieve":
            _dump(retrieve_game(parsed_args.game_id))
        elif parsed_args.command == "resolve":
            _dump(resolve_game(parsed_args.game_id))
        elif parsed_args.command == "digest":
            _dump(digest_game(parsed_args.game_id))
        elif parsed_args.command == "search":
            _dump(search_games(parsed_args.title, base_game_only=parsed_args.base_game_only))
        elif parsed_args.command == "reconcile":
            _dump(
                reconcile_entry(
                    parsed_args.storefront,
                    parsed_args.store_id,
                    parsed_args.title,
                )
            )
        elif parsed_args.command == "sync-steam":
            result = sync_steam_library()
            _dump(
                {
                    "fetched": result.fetched,
                    "resolved": result.resolved,
                    "unresolved": [entry.id for entry in result.unresolved],
                    "failed": [entry.id for entry in result.failed],
                    "game_ids": result.game_ids,
                }
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except QuestlogError as exc:
        log.error("%s failed (%s): %s", parsed_args.command, http_status_for(exc), exc)  # noqa: TRY400
        sys.exit(1)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
