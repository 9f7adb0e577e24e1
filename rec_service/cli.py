#!/usr/bin/env python3
"""
Batch recommendation CLI.

Computes and stores recommendations outside a request cycle (e.g. from a
scheduled job), and inspects or updates stored history.

Uses DATA_SOURCE / CONTENT_JSON_PATH / RECOMMENDATIONS_JSON_PATH /
ALGORITHM_CONFIG_PATH from the environment or the root .env.

Usage:
  From repo root:
    # Compute, store, and print recommendations for two users
    python -m rec_service.cli recommend alice bob --limit 20

    # People with similar tagging habits
    python -m rec_service.cli similar-users alice --limit 10

    # Items sharing tags with one item
    python -m rec_service.cli related item-42 --tags python,async

    # Stored history and interaction tracking
    python -m rec_service.cli history alice --limit 20
    python -m rec_service.cli mark alice 3f9c2a7b1d0e clicked
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from .config import get_config
from .services import INTERACTION_ACTIONS
from .state import get_state


def _dump(payload) -> None:
    print(json.dumps(payload, indent=2, default=str))


async def _recommend(user_ids: List[str], limit: Optional[int]) -> int:
    engine = get_state().engine
    batches = await asyncio.gather(
        *(engine.generate_batch(user_id, limit) for user_id in user_ids)
    )
    exit_code = 0
    out = []
    for batch in batches:
        if not batch.persisted:
            exit_code = 1
        out.append(
            {
                "user_id": batch.user_id,
                "type": "content",
                "count": len(batch.recommendations),
                "persisted": batch.persisted,
                "failed_sources": batch.failed_sources,
                "recommendations": [c.model_dump(mode="json") for c in batch.recommendations],
            }
        )
    _dump(out)
    return exit_code


async def _similar_users(user_id: str, limit: int) -> int:
    users = await get_state().engine.get_similar_users(user_id, limit)
    _dump(
        {
            "type": "users",
            "count": len(users),
            "recommendations": [u.model_dump(mode="json") for u in users],
        }
    )
    return 0


async def _related(item_id: str, tags: List[str], limit: Optional[int]) -> int:
    items = await get_state().engine.get_related_items(item_id, tags, limit)
    _dump([c.model_dump(mode="json") for c in items])
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Hybrid recommendation batch tool")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("recommend", help="Compute, store, and print recommendations")
    p.add_argument("user_ids", nargs="+", help="One or more user ids")
    p.add_argument("--limit", type=int, default=None, help="Max recommendations per user (default: config)")

    p = sub.add_parser("similar-users", help="Rank users with similar tags")
    p.add_argument("user_id")
    p.add_argument("--limit", type=int, default=10)

    p = sub.add_parser("related", help="Items sharing tags with one item")
    p.add_argument("item_id")
    p.add_argument("--tags", required=True, help="Comma-separated tags of the item")
    p.add_argument("--limit", type=int, default=None)

    p = sub.add_parser("history", help="Stored recommendations, newest batch first")
    p.add_argument("user_id")
    p.add_argument("--limit", type=int, default=None)

    p = sub.add_parser("mark", help="Mark a stored recommendation as shown/clicked/dismissed")
    p.add_argument("user_id")
    p.add_argument("record_id")
    p.add_argument("action", choices=INTERACTION_ACTIONS)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, get_config().log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )

    if args.command == "recommend":
        if args.limit is not None and args.limit < 0:
            print("--limit must be >= 0", file=sys.stderr)
            return 2
        return asyncio.run(_recommend(args.user_ids, args.limit))
    if args.command == "similar-users":
        return asyncio.run(_similar_users(args.user_id, args.limit))
    if args.command == "related":
        tags = [t.strip() for t in args.tags.split(",") if t.strip()]
        return asyncio.run(_related(args.item_id, tags, args.limit))
    if args.command == "history":
        rows = get_state().recommendation_store.list_recommendations(args.user_id, args.limit)
        _dump(rows)
        return 0
    if args.command == "mark":
        updated = get_state().recommendation_store.mark_interaction(
            args.user_id, args.record_id, args.action
        )
        if not updated:
            print(f"Recommendation {args.record_id} not found for {args.user_id}", file=sys.stderr)
            return 1
        _dump({"message": "Recommendation updated successfully"})
        return 0
    return 2


if __name__ == "__main__":
    sys.exit(main())
