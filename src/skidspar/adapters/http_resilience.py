from __future__ import annotations

from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import (
    TYPE_CHECKING,
    TypedDict,
    Unpack,
)

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import RetryTransport

from skidspar.config.http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from skidspar.domain.errors import (
    MalformedResponseError,
    SourceRejectedError,
    SourceUnavailableError,
)

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._client import UseClientDefault
    from httpx._types import (
        AuthTypes,
        CookieTypes,
        HeaderTypes,
        QueryParamTypes,
        RequestContent,
        RequestData,
        RequestExtensions,
        RequestFiles,
        TimeoutTypes,
        URLTypes,
    )

    from skidspar.config.http_resilience import ResponseHook

log = getLogger(__name__)


class RequestOptions(TypedDict, total=False):
    content: RequestContent | None
    data: RequestData | None
    files: RequestFiles | None
    json: object
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    cookies: CookieTypes | None
    auth: AuthTypes | UseClientDefault | None
    follow_redirects: bool | UseClientDefault
    timeout: TimeoutTypes | UseClientDefault
    extensions: RequestExtensions | None


class AsyncClientOptions(TypedDict, total=False):
    base_url: str
    timeout: TimeoutTypes
    headers: HeaderTypes
    event_hooks: dict[str, list[ResponseHook]]
    transport: httpx.AsyncBaseTransport


class ResilientClient:
    """Async HTTP client with transport retries and an optional rate limit.

    ``transport`` replaces the retrying transport entirely, which is how tests
    plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )

        headers = dict(config.default_headers) if config.default_headers else None
        event_hooks = {"response": list(config.response_hooks)} if config.response_hooks else None

        client_kwargs: AsyncClientOptions = {
            "timeout": config.timeout_seconds,
            "transport": transport or RetryTransport(retry=config.retry.build()),
        }
        if config.base_url is not None:
            client_kwargs["base_url"] = config.base_url
        if headers is not None:
            client_kwargs["headers"] = headers
        if event_hooks is not None:
            client_kwargs["event_hooks"] = event_hooks

        self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        async def do_request() -> httpx.Response:
            return await self._client.request(method, url, **kwargs)

        return await self._send(do_request)

    async def get(
        self,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def patch(
        self,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        return await self.request("PATCH", url, **kwargs)

    async def _send(self, func: Callable[[], Awaitable[httpx.Response]]) -> httpx.Response:
        if self._limiter is None:
            return await func()
        async with self._limiter:
            return await func()


async def get_checked(
    client: ResilientClient,
    url: URLTypes,
    *,
    source: str,
    **kwargs: Unpack[RequestOptions],
) -> httpx.Response:
    """GET ``url`` and translate transport and status failures into integration errors.

    Anything but ``200 OK`` is a rejection; the status, content type and body are
    kept on the error for diagnosis.
    """

    try:
        response = await client.get(url, **kwargs)
    except httpx.TransportError as exc:
        raise SourceUnavailableError(f"failed to reach {source}: {exc}", source=source) from exc

    if response.status_code >= httpx.codes.BAD_REQUEST:
        log.error(
            "Request to %s failed: %s %s -> %s",
            source,
            response.request.method,
            response.request.url,
            response.status_code,
        )
    if response.status_code != httpx.codes.OK:
        raise SourceRejectedError(
            source=source,
            status_code=response.status_code,
            content_type=response.headers.get("Content-Type"),
            body=response.text,
        )
    return response


def decode_json(response: httpx.Response, *, source: str) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise MalformedResponseError(
            f"failed to decode {source} response: {exc}", source=source
        ) from exc


__all__ = [
    "RateLimit",
    "RequestOptions",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "decode_json",
    "get_checked",
]
