from __future__ import annotations

from typing import Any, TYPE_CHECKING
from sys import version_info

from aiohttp import __version__ as aiohttp_version
from orjson import JSONDecodeError, dumps, loads
import logfire

from slashgate.errors import (
    HTTPException,
    ServerError,
    Unauthorized,
    BadRequest,
    Forbidden,
    NotFound,
    Conflict
)
from slashgate.version import VERSION

if TYPE_CHECKING:
    from aiohttp import ClientSession, ClientResponse

    from .endpoint import Endpoint


__all__ = (
    'Route',
    'USER_AGENT',
    'json_or_text',
    'request',
)


USER_AGENT = ' '.join([
    f'DiscordBot (https://github.com/slashgate/slashgate, {VERSION})',
    f'Python/{'.'.join(str(i) for i in version_info[:3])}',
    f'aiohttp/{aiohttp_version}'
])


class Route:
    def __init__(
        self,
        method: str,
        endpoint: Endpoint
    ) -> None:
        self.method = method
        self.endpoint = endpoint

    @property
    def url(self) -> str:
        return self.endpoint.url

    @property
    def resource(self) -> str:
        # ? interaction tokens are credentials, never log the full path
        return self.endpoint.segments[0] if self.endpoint.segments else ''

    def __repr__(self) -> str:
        return f'<Route {self.method} {self.resource}>'


async def json_or_text(response: ClientResponse) -> dict[str, Any] | str:
    text = await response.text(encoding='utf-8')
    try:
        if response.headers['content-type'] == 'application/json':
            return loads(text)
    except (KeyError, JSONDecodeError):
        # ? a json content type does not guarantee a json body
        pass

    return text


async def request(
    session: ClientSession,
    route: Route,
    *,
    headers: dict[str, str],
    json: dict[str, Any] | list[Any] | None = None,
) -> Any:  # noqa: ANN401
    """issue exactly one call, no retries and no rate limit handling

    returns the decoded body on success, raises the matching
    HTTPException subclass otherwise
    """
    data = None

    if json is not None:
        data = dumps(json)

    async with session.request(
        route.method,
        route.url,
        data=data,
        headers=headers
    ) as response:
        resp_data = await json_or_text(response)

        logfire.debug(
            '{method} {resource} returned {status_code}',
            method=route.method,
            resource=route.resource,
            status_code=response.status
        )

        if 300 > response.status >= 200:
            return resp_data

        match response.status:
            case 400:
                raise BadRequest(resp_data)
            case 401:
                raise Unauthorized(resp_data)
            case 403:
                raise Forbidden(resp_data)
            case 404:
                raise NotFound(resp_data)
            case 409:
                raise Conflict(resp_data)
            case _ if response.status >= 500:
                raise ServerError(resp_data, response.status)
            case _:
                raise HTTPException(resp_data, response.status)
