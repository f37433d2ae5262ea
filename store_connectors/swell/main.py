import asyncio
import json

from store_connectors.core.exceptions import ApiError, ConfigurationError
from store_connectors.swell.api_client import SwellClient


async def main():

# Main pour tester le client Swell (SWELL_STORE_ID / SWELL_SECRET_KEY dans le .env)

    try:
        client = SwellClient.from_env()
    except ConfigurationError as e:
        print(f"❌ {e}")
        return

    async with client:
        path = input("🛒 Entrez la ressource à lire [/products] : ").strip() or "/products"

        print(f"\n⏳ GET {client.options.url}{path} ...\n")

        try:
            data = await client.get(path, {"limit": 5})
        except ApiError as e:
            print(f"❌ {e.code} ({e.status}) : {e.message}")
            return

        print(json.dumps(data, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    asyncio.run(main())
