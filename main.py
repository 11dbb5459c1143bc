#!/usr/bin/env python3
"""
AccessScout command line.

Examples:
    python main.py --query "AI startups" --limit 10
    python main.py --mock --out shared/sites.json
    python main.py --create-scout --query "early stage startup landing page accessibility"
    python main.py --poll-scout <id>
    python main.py --list-scouts
    python main.py --scout-status <id>
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from api.yutori_client import YutoriClient
from config.config import DEFAULT_OUTPUT_PATH, Config, MissingCredentialError
from orchestrator.scout_updates import scout_poll_run
from scout.factory import create_discovery_orchestrator_from_env
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SCOUT_QUERY = "early stage startup landing page accessibility"
RULE = "-" * 64


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find early-stage sites worth an accessibility audit")
    parser.add_argument("-q", "--query", help="Search query (overrides the default multi-query strategy)")
    parser.add_argument("-l", "--limit", type=int, default=20, help="Max number of sites to return")
    parser.add_argument("-o", "--out", default=None, help=f"Output file path (default: {DEFAULT_OUTPUT_PATH})")
    parser.add_argument("--mock", action="store_true", help="Force mock mode")

    scouts = parser.add_mutually_exclusive_group()
    scouts.add_argument("--create-scout", action="store_true", help="Create a persistent daily scout for --query")
    scouts.add_argument("--poll-scout", metavar="ID", help="Fetch results of a persistent scout")
    scouts.add_argument("--list-scouts", action="store_true", help="List persistent scouts")
    scouts.add_argument("--scout-status", metavar="ID", help="Show detailed status for a scout")
    return parser


def write_json(path: str, payload: dict[str, Any]) -> None:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _announce_credentials(config: Config, mock: bool) -> None:
    if mock:
        return
    if not config.has_yutori_key:
        print(RULE)
        print("WARNING: YUTORI_API_KEY is missing from environment.")
        print("   The scout will automatically fall back to MOCK mode.")
        print("   To use real search, add YUTORI_API_KEY to your .env file.")
        print(RULE)
    else:
        print("YUTORI_API_KEY detected.")


async def list_scouts(client: YutoriClient) -> None:
    print("Fetching active scouts...")
    scouts = await client.list_scouts()
    print(f"\nFound {len(scouts)} scouts:")
    for s in scouts:
        print(f"- [{s.status.upper()}] ID: {s.id}")
        print(f'  Query: "{s.query}"')
        print(f"  Schedule: {s.schedule}")
        print(f"  Created: {s.created_at}")
        print("")


async def scout_status(client: YutoriClient, scout_id: str) -> None:
    print(f"Fetching status for Scout ID: {scout_id}...")
    status = await client.get_scout_status(scout_id)
    print("\nScout Status:")
    print(json.dumps(status, indent=2))


async def create_scout(client: YutoriClient, query: str) -> None:
    print("Checking for existing scouts...")
    existing = await client.find_active_scout(query)
    if existing:
        print(f'Found existing active scout for query "{query}" (ID: {existing.id}).')
        print(f"   Use --poll-scout {existing.id} to check results.")
        return

    print(f'Creating new daily scout for: "{query}"...')
    scout = await client.create_scout(query)
    print(f"Scout created successfully! ID: {scout.id}")
    print(f"   It will run daily. Check results later with --poll-scout {scout.id}")


async def poll_scout(client: YutoriClient, scout_id: str, out_path: str) -> None:
    print(f"Polling results for Scout ID: {scout_id}...")
    updates = await client.get_scout_updates(scout_id)
    run = scout_poll_run(scout_id, updates)
    write_json(out_path, run.to_dict())
    print(f"Successfully wrote {run.site_count} results to {out_path}")


async def run_discovery(args: argparse.Namespace, out_path: str) -> None:
    orchestrator = create_discovery_orchestrator_from_env()
    run = await orchestrator.run(query=args.query, limit=args.limit, mock=args.mock)
    write_json(out_path, run.to_dict())
    print(f"Successfully wrote {run.site_count} sites to {out_path}")


async def dispatch(args: argparse.Namespace, config: Config) -> None:
    out_path = args.out or config.SCOUT_OUTPUT_PATH

    scout_action = args.list_scouts or args.create_scout or args.poll_scout or args.scout_status
    if not scout_action:
        await run_discovery(args, out_path)
        return

    client = YutoriClient(api_key=config.require("YUTORI_API_KEY"), base_url=config.YUTORI_API_URL)

    if args.list_scouts:
        await list_scouts(client)
    elif args.scout_status:
        await scout_status(client, args.scout_status)
    elif args.create_scout:
        await create_scout(client, args.query or DEFAULT_SCOUT_QUERY)
    else:
        await poll_scout(client, args.poll_scout, out_path)


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    if args.limit <= 0:
        print("Error: --limit must be a positive integer", file=sys.stderr)
        return 2

    config = Config()
    _announce_credentials(config, args.mock)

    try:
        asyncio.run(dispatch(args, config))
    except MissingCredentialError as e:
        print(f"Error: cannot run this scout action without {e.name}.", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error(f"Error running scout: {e}", exc_info=True)
        print(f"Error running scout: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
