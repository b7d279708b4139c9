#!/usr/bin/env python3
"""
Seed the token registry with the demo records shown by the original web UI.

Records are appended through the store, so ids and timestamps are assigned
as for any other create.
"""

import argparse
import sys
from pathlib import Path
from typing import List

import structlog

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.config import settings  # noqa: E402
from src.models.token import TokenRecord  # noqa: E402
from src.services.registry_store import JsonFileTokenStore, TokenStore  # noqa: E402
from src.utils.logging import setup_logging  # noqa: E402

logger = structlog.get_logger()

DEMO_TOKENS = [
    {"owner": "John Doe", "tokenName": "JDToken", "balance": 1000, "fundingSource": "Personal",
     "fee": 0.5, "liquidity": 5000, "supplyPercentAdded": 2.5},
    {"owner": "Alice Smith", "tokenName": "ASToken", "balance": 2500, "fundingSource": "Venture Capital",
     "fee": 0.3, "liquidity": 12000, "supplyPercentAdded": 5.0},
    {"owner": "Robert Johnson", "tokenName": "RJToken", "balance": 750, "fundingSource": "Corporate",
     "fee": 0.7, "liquidity": 3000, "supplyPercentAdded": 1.8},
    {"owner": "Emily Davis", "tokenName": "EDToken", "balance": 3200, "fundingSource": "Angel Investor",
     "fee": 0.4, "liquidity": 8500, "supplyPercentAdded": 3.2},
    {"owner": "Michael Wilson", "tokenName": "MWToken", "balance": 1800, "fundingSource": "Personal",
     "fee": 0.6, "liquidity": 4200, "supplyPercentAdded": 2.1},
    {"owner": "Sarah Brown", "tokenName": "SBToken", "balance": 4500, "fundingSource": "Venture Capital",
     "fee": 0.2, "liquidity": 15000, "supplyPercentAdded": 6.5},
]


def seed(store: TokenStore) -> List[TokenRecord]:
    created = [store.create(fields) for fields in DEMO_TOKENS]
    logger.info("Seeded demo tokens", count=len(created))
    return created


def main():
    parser = argparse.ArgumentParser(description="Seed the token registry with demo records")
    parser.add_argument("--data-file", default=settings.DATA_FILE, help="Token data file")
    args = parser.parse_args()

    setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
    store = JsonFileTokenStore(args.data_file)
    store.initialize()
    seed(store)


if __name__ == "__main__":
    main()
