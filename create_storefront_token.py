# create_storefront_token.py
# Mint a storefront API token locked to one channel (e.g. the developer staging site).
import argparse
import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

from custom_fields_proxy.core.config import get_settings, split_csv
from custom_fields_proxy.core.errors import UpstreamError
from custom_fields_proxy.integrations.bigcommerce.bigcommerce_client import (
    create_storefront_token,
    new_client,
)


def parse_args(argv=None):
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create a BigCommerce storefront API token")
    parser.add_argument("--channel-id", type=int, default=settings.storefront_channel_id,
                        help="channel the token is locked to (STOREFRONT_CHANNEL_ID)")
    parser.add_argument("--origin", action="append", dest="origins",
                        default=None, help="allowed CORS origin, repeatable (STOREFRONT_ORIGINS)")
    parser.add_argument("--days", type=int, default=30, help="token lifetime in days")
    args = parser.parse_args(argv)
    if args.origins is None:
        args.origins = split_csv(settings.storefront_origins)
    if args.channel_id is None:
        parser.error("--channel-id or STOREFRONT_CHANNEL_ID is required")
    return args


async def main(argv=None) -> int:
    args = parse_args(argv)
    async with new_client(get_settings()) as client:
        try:
            token = await create_storefront_token(client, args.channel_id, args.origins, days=args.days)
        except UpstreamError as e:
            print(f"❌ Failed to create storefront token: HTTP {e.status_code}: {e.detail}", file=sys.stderr)
            return 1
    print(f"✅ New Storefront Token: {token.token}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
