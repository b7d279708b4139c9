"""
Runnable script for the Token Registry.
"""

import argparse
import sys
from contextlib import contextmanager

from src.config import settings
from src.main import main as run_server
from src.services.query_service import PAGE_SIZE, TokenQueryView
from src.services.registry_store import JsonFileTokenStore
from src.services.token_client import TokenApiClient
from src.utils.exceptions import TokenRegistryError
from src.utils.logging import setup_logging


COLUMNS = ("id", "owner", "tokenName", "balance", "fundingSource", "fee", "liquidity", "supplyPercentAdded", "timestamp")


@contextmanager
def open_store(api_url=None):
    """Use the HTTP API when a URL is given, otherwise the local data file."""
    if api_url:
        client = TokenApiClient(api_url)
        try:
            yield client
        finally:
            client.close()
        return
    store = JsonFileTokenStore(settings.DATA_FILE)
    store.initialize()
    yield store


def render_page(view: TokenQueryView) -> str:
    rows = [[str(record.to_dict()[c]) for c in COLUMNS] for record in view.current_page_records()]
    widths = [max([len(c)] + [len(row[i]) for row in rows]) for i, c in enumerate(COLUMNS)]
    lines = ["  ".join(c.ljust(w) for c, w in zip(COLUMNS, widths))]
    lines += ["  ".join(v.ljust(w) for v, w in zip(row, widths)) for row in rows]

    summary = view.summary()
    if summary.total == 0:
        lines.append("No tokens found")
    else:
        lines.append(f"{summary.describe()} (page {summary.page} of {summary.total_pages})")
    return "\n".join(lines)


def list_command(args) -> int:
    try:
        with open_store(args.api_url) as store:
            view = TokenQueryView(store, PAGE_SIZE, settings.RESET_PAGE_ON_SEARCH)
            view.load()
    except TokenRegistryError as e:
        print(f"Failed to list tokens: {e.message}", file=sys.stderr)
        return 1
    view.set_search_term(args.search)
    view.go_to_page(args.page)
    print(render_page(view))
    return 0


def add_command(args) -> int:
    fields = {
        "owner": args.owner,
        "tokenName": args.token_name,
        "balance": args.balance,
        "fundingSource": args.funding_source,
        "fee": args.fee,
        "liquidity": args.liquidity,
        "supplyPercentAdded": args.supply_percent_added,
    }
    try:
        with open_store(args.api_url) as store:
            record = TokenQueryView(store, PAGE_SIZE, settings.RESET_PAGE_ON_SEARCH).submit(fields)
    except TokenRegistryError as e:
        print(f"Failed to add token: {e.message}", file=sys.stderr)
        return 1
    print(f"Added token #{record.id} ({record.token_name}) at {record.timestamp}")
    return 0


def seed_command(args) -> int:
    from scripts.seed_demo_tokens import seed

    try:
        with open_store(args.api_url) as store:
            created = seed(store)
    except TokenRegistryError as e:
        print(f"Failed to seed demo tokens: {e.message}", file=sys.stderr)
        return 1
    print(f"Seeded {len(created)} demo tokens")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Token Registry")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the API server (default)")
    serve.add_argument("--host", default=None, help="Bind host")
    serve.add_argument("--port", type=int, default=None, help="Bind port")

    list_parser = subparsers.add_parser("list", help="Show one page of tokens")
    list_parser.add_argument("--search", default="", help="Filter by owner, token name or funding source")
    list_parser.add_argument("--page", type=int, default=1, help="Page number")
    list_parser.add_argument("--api-url", default=None, help="Read through a running API instead of the data file")

    add = subparsers.add_parser("add", help="Add a token")
    add.add_argument("--owner", required=True)
    add.add_argument("--token-name", required=True)
    add.add_argument("--balance", required=True)
    add.add_argument("--funding-source", required=True)
    add.add_argument("--fee", required=True)
    add.add_argument("--liquidity", required=True)
    add.add_argument("--supply-percent-added", required=True)
    add.add_argument("--api-url", default=None, help="Write through a running API instead of the data file")

    seed = subparsers.add_parser("seed", help="Add the demo tokens")
    seed.add_argument("--api-url", default=None, help="Write through a running API instead of the data file")

    return parser


if __name__ == "__main__":
    args = build_parser().parse_args()

    if args.command in (None, "serve"):
        run_server(host=getattr(args, "host", None), port=getattr(args, "port", None), debug=args.debug)
    else:
        setup_logging("DEBUG" if args.debug else settings.LOG_LEVEL, settings.LOG_JSON)
        handlers = {"list": list_command, "add": add_command, "seed": seed_command}
        sys.exit(handlers[args.command](args))
