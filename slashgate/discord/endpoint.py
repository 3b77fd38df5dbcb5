from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import quote
from typing import Self


__all__ = (
    'API_VERSIONS',
    'BASE_URL',
    'Endpoint',
)


BASE_URL = 'https://discord.com/api'
API_VERSIONS = ('v6', 'v8', 'v9', 'v10')


@dataclass(frozen=True, slots=True)
class Endpoint:
    """immutable path builder, every step returns a new endpoint

    `Endpoint.latest().application(123).commands().url`
    -> `https://discord.com/api/v10/applications/123/commands`
    """
    version: str = 'v10'
    segments: tuple[str, ...] = field(default=())
    base_url: str = BASE_URL

    def __post_init__(self) -> None:
        if self.version not in API_VERSIONS:
            raise ValueError(
                f'unsupported api version {self.version!r}, '
                f'expected one of {', '.join(API_VERSIONS)}'
            )

    @classmethod
    def latest(cls) -> Self:
        return cls(API_VERSIONS[-1])

    def _join(self, *segments: str | int) -> Endpoint:
        return Endpoint(
            self.version,
            self.segments + tuple(
                quote(segment, safe='@')
                if isinstance(segment, str) else
                str(segment)
                for segment in segments
            ),
            self.base_url
        )

    def application(self, application_id: int | str) -> Endpoint:
        return self._join('applications', application_id)

    def interaction(
        self,
        interaction_id: int | str,
        interaction_token: str
    ) -> Endpoint:
        return self._join('interactions', interaction_id, interaction_token)

    def webhook(
        self,
        application_id: int | str,
        interaction_token: str
    ) -> Endpoint:
        return self._join('webhooks', application_id, interaction_token)

    def guild(self, guild_id: int | str) -> Endpoint:
        return self._join('guilds', guild_id)

    def commands(self) -> Endpoint:
        return self._join('commands')

    def command(self, command_id: int | str) -> Endpoint:
        return self._join('commands', command_id)

    def permissions(self) -> Endpoint:
        return self._join('permissions')

    def callback(self) -> Endpoint:
        return self._join('callback')

    def messages(self) -> Endpoint:
        return self._join('messages')

    def original(self) -> Endpoint:
        return self._join('@original')

    def message(self, message_id: int | str) -> Endpoint:
        return self._join('messages', message_id)

    @property
    def path(self) -> str:
        return ''.join(f'/{segment}' for segment in self.segments)

    @property
    def url(self) -> str:
        return f'{self.base_url}/{self.version}{self.path}'

    def __str__(self) -> str:
        return self.url
