from __future__ import annotations

from collections.abc import Awaitable, Callable
from abc import ABC, abstractmethod
from typing import Any, ClassVar, TYPE_CHECKING

from slashgate.discord.enums import InteractionType

if TYPE_CHECKING:
    from slashgate.discord.models.command import ApplicationCommand
    from slashgate.discord.models.interaction import (
        AutocompleteInteraction,
        ModalSubmitInteraction,
        ComponentInteraction,
        CommandInteraction,
        Interaction
    )


__all__ = (
    'AutocompleteHandler',
    'CallbackHandler',
    'CommandHandler',
    'ComponentHandler',
    'InteractionCallback',
    'InteractionHandler',
    'ModalSubmitHandler',
)


type InteractionCallback = Callable[[Any], Awaitable[None]]


class InteractionHandler(ABC):
    """matches one (interaction type, key) pair

    the key is the command name for command and autocomplete handlers,
    and the custom id for component and modal handlers
    """
    type: ClassVar[InteractionType]

    def __init__(self, key: str) -> None:
        self.key = key

    def __repr__(self) -> str:
        return f'<{type(self).__name__} {self.type.name} {self.key!r}>'

    def matches(self, interaction: Interaction) -> bool:
        return (
            interaction.type == self.type and
            interaction.key == self.key
        )

    @abstractmethod
    async def handle(self, interaction: Any) -> None:  # noqa: ANN401
        ...


class CommandHandler(InteractionHandler):
    type = InteractionType.APPLICATION_COMMAND

    def __init__(self, command: ApplicationCommand) -> None:
        super().__init__(command.name)
        self.command = command

    @abstractmethod
    async def handle(self, interaction: CommandInteraction) -> None:
        ...


class AutocompleteHandler(InteractionHandler):
    type = InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE

    @abstractmethod
    async def handle(self, interaction: AutocompleteInteraction) -> None:
        ...


class ComponentHandler(InteractionHandler):
    type = InteractionType.MESSAGE_COMPONENT

    @abstractmethod
    async def handle(self, interaction: ComponentInteraction) -> None:
        ...


class ModalSubmitHandler(InteractionHandler):
    type = InteractionType.MODAL_SUBMIT

    @abstractmethod
    async def handle(self, interaction: ModalSubmitInteraction) -> None:
        ...


class CallbackHandler(InteractionHandler):
    """wraps a plain coroutine function as a handler of any kind"""

    def __init__(
        self,
        interaction_type: InteractionType,
        key: str,
        callback: InteractionCallback
    ) -> None:
        super().__init__(key)
        self.type = interaction_type
        self.callback = callback

    async def handle(self, interaction: Any) -> None:  # noqa: ANN401
        await self.callback(interaction)
