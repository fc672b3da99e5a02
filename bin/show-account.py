"""Print the account behind a session cookie and its Robux balance.

Usage: BLOXTRADE_CREDENTIAL=... uv run python bin/show-account.py [item_id]

With an item id, also prints the cheapest resale listings for that item.
"""

import asyncio
import sys

import structlog

from bloxtrade import Client, ClientError, ClientSettings
from bloxtrade.logging import setup_logging

logger = structlog.get_logger()


async def main() -> None:
    if len(sys.argv) > 2:
        print(f"Usage: {sys.argv[0]} [item_id]")
        sys.exit(1)

    item_id = int(sys.argv[1]) if len(sys.argv) == 2 else None
    settings = ClientSettings()
    setup_logging(log_dir=settings.log_dir)

    async with Client.from_settings(settings) as client:
        try:
            identity = await client.users.resolve()
            robux = await client.economy.robux()
            page = await client.economy.resellers(item_id) if item_id is not None else None
        except ClientError as e:
            logger.error("account lookup failed", error=str(e))
            sys.exit(1)

    print(f"{identity.display_name} (@{identity.username}, id {identity.user_id}): {robux} Robux")
    if page is not None:
        for listing in page.items:
            print(f"  uaid {listing.uaid}: {listing.price} Robux from {listing.reseller.name}")


if __name__ == "__main__":
    asyncio.run(main())
