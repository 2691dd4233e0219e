"""
Retry, Timeout and Interceptor Examples.

Uses httpx.MockTransport, so no network access is needed.
"""

import asyncio
import itertools

import httpx

from api_client import ApiClient, ApiError, LoggingConfig, RequestDescriptor


def flaky_transport() -> httpx.MockTransport:
    """503, 503, затем 200."""
    statuses = itertools.chain([503, 503], itertools.repeat(200))

    def handler(request: httpx.Request) -> httpx.Response:
        status = next(statuses)
        if status != 200:
            return httpx.Response(status, json={"message": "Service unavailable"})
        return httpx.Response(200, json={
            "leads": [{"id": 1}],
            "auth": request.headers.get("authorization"),
        })

    return httpx.MockTransport(handler)


async def retry_example():
    """Two 503s, then success (backoff 0.1s, 0.2s)."""
    print("\n=== Retry with backoff ===")

    logging_config = LoggingConfig.create(level="INFO", format="text")
    async with ApiClient(
        "https://crm.example.com/api",
        retries=3,
        retry_delay=0.1,
        logging=logging_config,
        transport=flaky_transport(),
    ) as client:
        print(await client.get("/leads"))


async def timeout_example():
    """Each attempt gets its own timeout."""
    print("\n=== Per-attempt timeout ===")

    async def never_answers(request):
        await asyncio.sleep(60)

    async with ApiClient(
        "https://crm.example.com/api",
        timeout=0.2,
        retries=1,
        retry_delay=0.1,
        transport=httpx.MockTransport(never_answers),
    ) as client:
        try:
            await client.get("/slow")
        except ApiError as e:
            print(f"{e.message} (network error: {e.is_network_error})")


async def interceptors_example():
    """Auth header and response unwrapping."""
    print("\n=== Interceptors ===")

    def add_auth(descriptor: RequestDescriptor) -> RequestDescriptor:
        return descriptor.with_headers({"Authorization": "Bearer token123"})

    def unwrap(response: httpx.Response, data):
        return data["leads"]

    async with ApiClient(
        "https://crm.example.com/api", retries=3, retry_delay=0.01, transport=flaky_transport()
    ) as client:
        client.add_request_interceptor(add_auth)
        client.add_response_interceptor(unwrap)
        print(await client.get("/leads"))


async def main():
    await retry_example()
    await timeout_example()
    await interceptors_example()


if __name__ == "__main__":
    asyncio.run(main())
