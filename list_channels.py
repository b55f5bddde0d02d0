# list_channels.py
# Find the channel whose domain matches your storefront URL, then pass its id
# to create_storefront_token.py.
import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

from custom_fields_proxy.core.config import get_settings
from custom_fields_proxy.core.errors import UpstreamError
from custom_fields_proxy.integrations.bigcommerce.bigcommerce_client import list_channels, new_client


async def main() -> int:
    async with new_client(get_settings()) as client:
        try:
            channels = await list_channels(client)
        except UpstreamError as e:
            print(f"❌ HTTP {e.status_code}: {e.detail}", file=sys.stderr)
            return 1

    print("Channels list:")
    for ch in channels:
        print(f"  {ch.id:>10}  {ch.name}  type={ch.type} platform={ch.platform} status={ch.status}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
