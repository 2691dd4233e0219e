"""
Environment Configuration and Fallback Examples.

Demonstrates loading configuration from environment variables and
serving mock data when no API is configured.
"""

import asyncio
import os

from api_client import (
    ApiClient,
    DataSource,
    FallbackPolicy,
    is_api_configured,
    load_from_env,
)

MOCK_LEADS = [
    {"id": 1, "name": "Acme Corp", "status": "new"},
    {"id": 2, "name": "Globex", "status": "qualified"},
]


def mock_provider(method, path, error):
    """Локальные данные для dashboard."""
    if path.startswith("/leads"):
        return {"data": MOCK_LEADS, "total": len(MOCK_LEADS)}
    return None


async def main():
    print("\n" + "=" * 60)
    print("Load from environment")
    print("=" * 60 + "\n")

    os.environ.setdefault("API_CLIENT_TIMEOUT", "5")
    os.environ.setdefault("API_CLIENT_RETRIES", "1")

    config = load_from_env()
    print(f"base_url={config.base_url} timeout={config.timeout} retries={config.retries}")

    # Без API_CLIENT_BASE_URL (или с API_CLIENT_USE_MOCK_DATA=true) сеть не используется
    policy = FallbackPolicy(
        bypass_network=not is_api_configured(),
        on_error=lambda error: error.is_network_error,
        simulated_delay=0.3,
    )

    async with ApiClient(config=config) as client:
        source = DataSource(client, mock_provider, policy)
        leads = await source.get("/leads")
        print(f"Leads: {leads}")


if __name__ == "__main__":
    asyncio.run(main())
