from __future__ import annotations

from typing import Any, TYPE_CHECKING

from aiohttp import ClientError
import logfire

from slashgate.discord.enums import StatusCode
from slashgate.errors import HTTPException
from slashgate.discord.http import Route

if TYPE_CHECKING:
    from slashgate.discord.models.command import ApplicationCommand
    from slashgate.client import Client


__all__ = (
    'CommandManager',
)


class CommandManager:
    """ordered, in-memory set of commands pushed with one bulk overwrite"""

    def __init__(self) -> None:
        self._commands: list[ApplicationCommand] = []

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def commands(self) -> tuple[ApplicationCommand, ...]:
        return tuple(self._commands)

    @property
    def payload(self) -> list[dict[str, Any]]:
        return [
            command.as_payload()
            for command in self._commands
        ]

    def get(self, name: str) -> ApplicationCommand | None:
        return next(
            (command for command in self._commands if command.name == name),
            None
        )

    def register(self, *commands: ApplicationCommand) -> None:
        for command in commands:
            if self.get(command.name) is not None:
                # ? discord rejects the whole push, so this surfaces there
                logfire.warn(
                    'command {name} is already registered',
                    name=command.name
                )

            self._commands.append(command)

    async def push(self, client: Client) -> bool:
        route = Route('PUT', client.endpoint.commands())

        with logfire.span(
            'pushing {count} commands',
            count=len(self._commands)
        ):
            try:
                await client.request(route, json=self.payload)
            except HTTPException as e:
                logfire.error(
                    'failed to push {count} commands',
                    count=len(self._commands),
                    status_code=StatusCode.CONFLICT.value,
                    response_status=e.status_code,
                    detail=e.detail
                )
                return False
            except (ClientError, TimeoutError, ValueError) as e:
                logfire.error(
                    'failed to push {count} commands',
                    count=len(self._commands),
                    status_code=StatusCode.CONFLICT.value,
                    _exc_info=e
                )
                return False

        logfire.info(
            'pushed {count} commands',
            count=len(self._commands),
            commands=[command.name for command in self._commands]
        )

        return True
