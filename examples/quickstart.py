"""
Quickstart example for reqflow.

Sends a GET and a POST through the client with an offline guard, a
response unwrapper and a short response timeout.

Usage:
    REQFLOW_BASE_URL=https://httpbin.org python examples/quickstart.py
"""

import asyncio
import logging
import os

from reqflow import ClientConfig, RequestClient, is_timeout
from reqflow.logging_setup import setup_structured_logger


def offline_guard(context):
    """Skip every request while OFFLINE is set."""
    return not os.getenv("OFFLINE")


def unwrap_json(outcome, context):
    if is_timeout(outcome):
        return {"error": "timeout", "url": context.url}
    return outcome.parse_json()


async def main():
    setup_structured_logger(logging.DEBUG)

    config = ClientConfig.from_env(options={"responseTimeout": 3000})

    async with RequestClient(config) as client:
        client.set_default_header("User-Agent", "reqflow-quickstart")
        client.add_before_send_middleware(offline_guard)
        client.add_after_receive_middleware(unwrap_json)

        print(await client.get("/get", {"page_size": 10}))
        print(
            await client.post(
                "/post",
                {"orderId": 42},
                options={"beforeSendConversionMode": "snakeCase"},
            )
        )


if __name__ == "__main__":
    asyncio.run(main())
