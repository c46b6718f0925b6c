import time
from typing import Awaitable, Callable, Optional

import httpx

from odontocare.core.logger import logger

TokenProvider = Callable[[], Awaitable[Optional[str]]]


class BearerTokenHook:
    """Attaches the persisted session token to every outgoing request."""

    def __init__(self, token_provider: TokenProvider):
        self.token_provider = token_provider

    async def __call__(self, request: httpx.Request) -> None:
        token = await self.token_provider()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"


async def stamp_start_time(request: httpx.Request) -> None:
    request.extensions["odontocare_started_at"] = time.time()


async def log_response(response: httpx.Response) -> None:
    request = response.request
    start_time = request.extensions.get("odontocare_started_at", time.time())
    process_time = time.time() - start_time

    logger.info(
        f"Method: {request.method} | "
        f"Path: {request.url.path} | "
        f"Status: {response.status_code} | "
        f"Duration: {process_time:.4f}s"
    )
