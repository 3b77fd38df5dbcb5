from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Self, TYPE_CHECKING

from slashgate.discord.dispatch import InteractionManager
from slashgate.discord.commands import CommandManager
from slashgate.client import Client

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from slashgate.discord.models.command import ApplicationCommand
    from slashgate.discord.handlers import InteractionCallback
    from slashgate.env import Env


__all__ = (
    'AppContext',
)


@dataclass
class AppContext:
    """everything a request needs, built once at startup"""
    env: Env
    client: Client
    commands: CommandManager = field(default_factory=CommandManager)
    interactions: InteractionManager = field(init=False)
    push_commands: bool = False

    def __post_init__(self) -> None:
        self.interactions = InteractionManager(self.client)

    @classmethod
    def new(
        cls,
        env: Env,
        *,
        push_commands: bool = False,
        session: ClientSession | None = None
    ) -> Self:
        return cls(
            env=env,
            client=Client(env, session),
            push_commands=push_commands
        )

    def command(
        self,
        command: ApplicationCommand
    ) -> Callable[[InteractionCallback], InteractionCallback]:
        """register the command for pushing and its callback for dispatch"""
        self.commands.register(command)
        return self.interactions.command(command)
