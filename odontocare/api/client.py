from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from odontocare.core.config import Settings
from odontocare.core.exceptions import ApiError
from odontocare.middleware.request_hooks import (
    BearerTokenHook,
    TokenProvider,
    log_response,
    stamp_start_time,
)


def build_http_client(
    settings: Settings,
    token_provider: TokenProvider,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    # No timeout and no retries: a single failed call surfaces a single error.
    return httpx.AsyncClient(
        base_url=settings.API_URL,
        headers={"Content-Type": "application/json"},
        timeout=None,
        transport=transport,
        event_hooks={
            "request": [BearerTokenHook(token_provider), stamp_start_time],
            "response": [log_response],
        },
    )


ModelT = TypeVar("ModelT", bound=BaseModel)


def parse(model: Type[ModelT], data: Any) -> ModelT:
    """Validate a response body, reporting a payload that does not fit as ApiError."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ApiError(f"Unexpected {model.__name__} payload: {exc}") from exc


def parse_list(model: Type[ModelT], data: Any) -> List[ModelT]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ApiError(f"Expected a list of {model.__name__}, got {type(data).__name__}")
    return [parse(model, item) for item in data]


def _error_detail(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if isinstance(body, dict):
        for key in ("detail", "message", "mensagem", "error"):
            if body.get(key):
                return str(body[key])
    return None


class ApiClient:
    """JSON request/response wrapper that reports every failure as ApiError."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            response = await self.http.request(method, path, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise ApiError(
                f"{method} {path} failed with status {status}",
                status_code=status,
                detail=_error_detail(exc.response),
            ) from exc
        except httpx.TransportError as exc:
            raise ApiError(f"{method} {path} failed: {exc}") from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                f"{method} {path} returned a body that is not JSON",
                status_code=response.status_code,
            ) from exc

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def close(self) -> None:
        await self.http.aclose()
