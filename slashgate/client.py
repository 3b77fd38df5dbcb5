from __future__ import annotations

from typing import Any, TYPE_CHECKING

from nacl.signing import VerifyKey
from aiohttp import ClientSession

from slashgate.discord.http import USER_AGENT, Route, request
from slashgate.discord.endpoint import Endpoint

if TYPE_CHECKING:
    from slashgate.env import Env


__all__ = (
    'Client',
)


class Client:
    """application credentials plus the outbound http session"""

    def __init__(
        self,
        env: Env,
        session: ClientSession | None = None
    ) -> None:
        self.application_id = env.application_id
        self.public_key = env.application_public_key
        self.api_version = env.api_version
        self.__secret = env.application_secret
        # ? invalid keys should fail at startup, not on the first request
        self.verify_key = VerifyKey(bytes.fromhex(self.public_key))
        self._session = session
        self._owns_session = False

    def __repr__(self) -> str:
        return f'<Client application_id={self.application_id}>'

    @property
    def headers(self) -> dict[str, str]:
        return {
            'Authorization': f'Bot {self.__secret}',
            'Content-Type': 'application/json',
            'User-Agent': USER_AGENT
        }

    @property
    def base(self) -> Endpoint:
        return Endpoint(self.api_version)

    @property
    def endpoint(self) -> Endpoint:
        return self.base.application(self.application_id)

    @property
    def session(self) -> ClientSession:
        if self._session is None:
            raise RuntimeError('client session not started')

        return self._session

    async def start(self) -> None:
        if self._session is not None:
            return

        self._session = ClientSession()
        self._owns_session = True

    async def close(self) -> None:
        if self._session is None or not self._owns_session:
            return

        await self._session.close()
        self._session = None
        self._owns_session = False

    async def request(
        self,
        route: Route,
        *,
        json: dict[str, Any] | list[Any] | None = None
    ) -> Any:  # noqa: ANN401
        return await request(
            self.session,
            route,
            headers=self.headers,
            json=json
        )
