"""
Basic API Client Usage Examples

Demonstrates GET, POST, PUT, PATCH and DELETE requests.
"""

import asyncio

from api_client import ApiClient, ApiError

BASE_URL = "https://jsonplaceholder.typicode.com"


async def basic_get_request(client: ApiClient):
    """Simple GET request."""
    print("\n=== Basic GET Request ===")

    post = await client.get("/posts/1")
    print(f"Data: {post}")


async def post_with_body(client: ApiClient):
    """POST request; the body is serialized to JSON."""
    print("\n=== POST with JSON ===")

    created = await client.post("/posts", {
        "title": "My Post",
        "body": "This is the content",
        "userId": 1
    })
    print(f"Created: {created}")


async def update_requests(client: ApiClient):
    """PUT and PATCH."""
    print("\n=== PUT / PATCH ===")

    updated = await client.put("/posts/1", {"id": 1, "title": "Updated Title", "userId": 1})
    print(f"Updated: {updated}")

    patched = await client.patch("/posts/1", {"title": "Patched"})
    print(f"Patched: {patched}")


async def delete_request(client: ApiClient):
    """DELETE request."""
    print("\n=== DELETE Request ===")

    await client.delete("/posts/1")
    print("Resource deleted")


async def with_query_params(client: ApiClient):
    """Extra keyword arguments go to httpx as is."""
    print("\n=== GET with Query Params ===")

    posts = await client.get("/posts", params={"userId": 1})
    print(f"Found {len(posts)} posts")


async def error_handling(client: ApiClient):
    """All failures are ApiError."""
    print("\n=== Error Handling ===")

    try:
        await client.get("/definitely-missing", retries=0)
    except ApiError as e:
        print(f"status={e.status} client_error={e.is_client_error} retryable={e.is_retryable}")


async def main():
    async with ApiClient(BASE_URL, timeout=10, retries=1) as client:
        await basic_get_request(client)
        await post_with_body(client)
        await update_requests(client)
        await delete_request(client)
        await with_query_params(client)
        await error_handling(client)


if __name__ == "__main__":
    asyncio.run(main())
