from __future__ import annotations

from collections.abc import Callable
from typing import Any, TYPE_CHECKING
from time import time

from fastapi.responses import JSONResponse, PlainTextResponse, Response
import logfire

from slashgate.errors import HandlerNotFound, on_interaction_error
from slashgate.discord.enums import InteractionType, StatusCode
from slashgate.discord.types import DISCORD_EPOCH
from slashgate.discord.models.interaction import (
    PingInteraction,
    Interaction
)
from slashgate.discord.handlers import (
    InteractionCallback,
    InteractionHandler,
    CallbackHandler
)

if TYPE_CHECKING:
    from slashgate.discord.models.command import ApplicationCommand
    from slashgate.client import Client


__all__ = (
    'InteractionManager',
    'PONG',
)


PONG = JSONResponse(PingInteraction.acknowledgement)
RECEIVED = 'Interaction received.'


class InteractionManager:
    """first registered handler wins, found by a linear scan"""

    def __init__(self, client: Client | None = None) -> None:
        self.client = client
        self._handlers: list[InteractionHandler] = []

    def __len__(self) -> int:
        return len(self._handlers)

    @property
    def handlers(self) -> tuple[InteractionHandler, ...]:
        return tuple(self._handlers)

    def register(self, *handlers: InteractionHandler | None) -> None:
        for handler in handlers:
            if handler is None:
                continue

            if any(
                existing.type == handler.type and
                existing.key == handler.key
                for existing in self._handlers
            ):
                logfire.warn(
                    'duplicate {type} handler for {key}, '
                    'the first registered handler will be used',
                    type=handler.type.name,
                    key=handler.key
                )

            self._handlers.append(handler)

    def _decorator(
        self,
        interaction_type: InteractionType,
        key: str
    ) -> Callable[[InteractionCallback], InteractionCallback]:
        def decorator(callback: InteractionCallback) -> InteractionCallback:
            self.register(CallbackHandler(interaction_type, key, callback))
            return callback

        return decorator

    def command(
        self,
        command: ApplicationCommand
    ) -> Callable[[InteractionCallback], InteractionCallback]:
        return self._decorator(
            InteractionType.APPLICATION_COMMAND, command.name)

    def autocomplete(
        self,
        command_name: str
    ) -> Callable[[InteractionCallback], InteractionCallback]:
        return self._decorator(
            InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE, command_name)

    def component(
        self,
        custom_id: str
    ) -> Callable[[InteractionCallback], InteractionCallback]:
        return self._decorator(
            InteractionType.MESSAGE_COMPONENT, custom_id)

    def modal(
        self,
        custom_id: str
    ) -> Callable[[InteractionCallback], InteractionCallback]:
        return self._decorator(
            InteractionType.MODAL_SUBMIT, custom_id)

    def handler_for(self, interaction: Interaction) -> InteractionHandler:
        for handler in self._handlers:
            if handler.matches(interaction):
                return handler

        raise HandlerNotFound(
            f'no handler registered for {interaction.key!r}'
        )

    async def handle(self, payload: dict[str, Any]) -> Response:
        """classify and dispatch one verified payload

        raises ValidationError for payloads that are not interactions,
        every other failure is logged and answered with a 404
        """
        # ? pings are answered from the type alone, nothing else is validated
        if (
            isinstance(payload, dict) and
            payload.get('type') == InteractionType.PING.value
        ):
            return PONG

        interaction = Interaction.from_payload(payload, self.client)

        latency = round(
            time()*1000-((interaction.id >> 22) + DISCORD_EPOCH)
        )

        with logfire.span(
            '{type} interaction {key}',
            type=getattr(interaction.type, 'name', interaction.type),
            key=interaction.key,
            interaction_id=str(interaction.id),
            latency=latency
        ):
            try:
                handler = self.handler_for(interaction)
                await handler.handle(interaction)
            except Exception as e:  # noqa: BLE001
                on_interaction_error(interaction, e)
                return Response(status_code=StatusCode.NOT_FOUND)

        return PlainTextResponse(RECEIVED, status_code=StatusCode.OK)
