from __future__ import annotations

from typing import Any, TYPE_CHECKING

from aiohttp import ClientError
import logfire

from slashgate.missing import MISSING, Optional, Nullable, is_not_missing
from slashgate.errors import HTTPException, InteractionError
from slashgate.discord.http import Route
from slashgate.discord.enums import (
    InteractionCallbackType,
    InteractionType,
    MessageFlag
)

if TYPE_CHECKING:
    from slashgate.discord.models.command import ApplicationCommand
    from slashgate.discord.models.component import MessageComponent, Modal
    from slashgate.client import Client

    from . import Interaction


__all__ = (
    'InteractionFollowup',
    'InteractionResponse',
)


PRIMARY_CALLBACKS = frozenset({
    InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE,
    InteractionCallbackType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE,
    InteractionCallbackType.DEFERRED_UPDATE_MESSAGE,
    InteractionCallbackType.UPDATE_MESSAGE,
    InteractionCallbackType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT,
    InteractionCallbackType.MODAL
})

ALLOWED_CALLBACKS: dict[InteractionType, frozenset[InteractionCallbackType]] = {
    InteractionType.APPLICATION_COMMAND: frozenset({
        InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE,
        InteractionCallbackType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE,
        InteractionCallbackType.MODAL
    }),
    InteractionType.MESSAGE_COMPONENT: frozenset({
        InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE,
        InteractionCallbackType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE,
        InteractionCallbackType.DEFERRED_UPDATE_MESSAGE,
        InteractionCallbackType.UPDATE_MESSAGE,
        InteractionCallbackType.MODAL
    }),
    InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE: frozenset({
        InteractionCallbackType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT
    }),
    InteractionType.MODAL_SUBMIT: frozenset({
        InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE,
        InteractionCallbackType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE,
        InteractionCallbackType.DEFERRED_UPDATE_MESSAGE,
        InteractionCallbackType.UPDATE_MESSAGE
    })
}


def message_payload(
    content: Optional[Nullable[str]] = MISSING,
    *,
    ephemeral: bool = False,
    tts: Optional[bool] = MISSING,
    embeds: Optional[Nullable[list[dict[str, Any]]]] = MISSING,
    allowed_mentions: Optional[Nullable[dict[str, Any]]] = MISSING,
    components: Optional[Nullable[list[MessageComponent]]] = MISSING,
) -> dict[str, Any]:
    json: dict[str, Any] = {}

    if is_not_missing(content):
        json['content'] = content

    if is_not_missing(tts):
        json['tts'] = tts

    if is_not_missing(embeds):
        json['embeds'] = embeds or []

    if is_not_missing(allowed_mentions):
        json['allowed_mentions'] = allowed_mentions or {}

    if is_not_missing(components):
        json['components'] = [
            component.as_payload()
            for component in components or []
        ]

    if ephemeral:
        json['flags'] = MessageFlag.EPHEMERAL.value

    return json


async def send(
    client: Client,
    route: Route,
    json: dict[str, Any] | None,
    action: str
) -> bool:
    """issue one call, failures are logged and never raised"""
    try:
        await client.request(route, json=json)
    except HTTPException as e:
        logfire.error(
            '{action} failed with status {status_code}',
            action=action,
            status_code=e.status_code,
            detail=e.detail
        )
        return False
    except (ClientError, TimeoutError, ValueError) as e:
        # ? ValueError covers bodies that could not be decoded
        logfire.error(
            '{action} failed without a usable response',
            action=action,
            _exc_info=e
        )
        return False

    return True


class InteractionResponse:
    def __init__(
        self,
        interaction: Interaction,
        client: Client | None
    ) -> None:
        self.interaction = interaction
        self._client = client
        self.responded = False

    @property
    def client(self) -> Client:
        if self._client is None:
            raise InteractionError('interaction is not bound to a client')

        return self._client

    @property
    def callback(self) -> Route:
        return Route(
            'POST',
            self.client.base.interaction(
                self.interaction.id,
                self.interaction.token
            ).callback()
        )

    @property
    def original(self) -> Route:
        return Route(
            'PATCH',
            self.client.base.webhook(
                self.interaction.application_id,
                self.interaction.token
            ).messages().original()
        )

    def _check(self, callback_type: InteractionCallbackType) -> None:
        allowed = ALLOWED_CALLBACKS.get(self.interaction.type, frozenset())

        if callback_type not in allowed:
            raise InteractionError(
                f'{callback_type.name} is not a valid response to '
                f'{getattr(self.interaction.type, 'name', self.interaction.type)}'
                ' interactions'
            )

        if callback_type in PRIMARY_CALLBACKS and self.responded:
            raise InteractionError(
                'interaction has already been responded to, '
                'use edit_original or followup.send instead'
            )

    async def _callback(
        self,
        callback_type: InteractionCallbackType,
        data: dict[str, Any] | None = None
    ) -> bool:
        self._check(callback_type)

        json: dict[str, Any] = {'type': callback_type.value}

        if data is not None:
            json['data'] = data

        # ? the token is spent even when discord rejects the response
        self.responded = True

        return await send(
            self.client,
            self.callback,
            json,
            f'{callback_type.name.lower()} response'
        )

    async def defer(self, ephemeral: bool = False) -> bool:
        return await self._callback(
            InteractionCallbackType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE,
            {'flags': MessageFlag.EPHEMERAL.value} if ephemeral else None
        )

    async def send_message(
        self,
        content: Optional[Nullable[str]] = MISSING,
        *,
        ephemeral: bool = False,
        tts: Optional[bool] = MISSING,
        embeds: Optional[Nullable[list[dict[str, Any]]]] = MISSING,
        allowed_mentions: Optional[Nullable[dict[str, Any]]] = MISSING,
        components: Optional[Nullable[list[MessageComponent]]] = MISSING,
    ) -> bool:
        return await self._callback(
            InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE,
            message_payload(
                content,
                ephemeral=ephemeral,
                tts=tts,
                embeds=embeds,
                allowed_mentions=allowed_mentions,
                components=components
            )
        )

    async def send_modal(self, modal: Modal) -> bool:
        return await self._callback(
            InteractionCallbackType.MODAL,
            modal.as_payload()
        )

    async def defer_update(self) -> bool:
        """only for MESSAGE_COMPONENT and MODAL_SUBMIT interactions"""
        return await self._callback(
            InteractionCallbackType.DEFERRED_UPDATE_MESSAGE
        )

    async def update_message(
        self,
        content: Optional[Nullable[str]] = MISSING,
        *,
        embeds: Optional[Nullable[list[dict[str, Any]]]] = MISSING,
        components: Optional[Nullable[list[MessageComponent]]] = MISSING,
    ) -> bool:
        """only for MESSAGE_COMPONENT and MODAL_SUBMIT interactions"""
        return await self._callback(
            InteractionCallbackType.UPDATE_MESSAGE,
            message_payload(
                content,
                embeds=embeds,
                components=components
            )
        )

    async def send_autocomplete_result(
        self,
        choices: list[ApplicationCommand.Option.Choice]
    ) -> bool:
        return await self._callback(
            InteractionCallbackType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT,
            {'choices': [
                choice.as_payload()
                for choice in choices[:25]
            ]}
        )

    async def edit_original(
        self,
        content: Optional[Nullable[str]] = MISSING,
        *,
        embeds: Optional[Nullable[list[dict[str, Any]]]] = MISSING,
        allowed_mentions: Optional[Nullable[dict[str, Any]]] = MISSING,
        components: Optional[Nullable[list[MessageComponent]]] = MISSING,
    ) -> bool:
        if self.interaction.type == InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE:
            raise InteractionError(
                'autocomplete interactions do not have an original message'
            )

        return await send(
            self.client,
            self.original,
            message_payload(
                content,
                embeds=embeds,
                allowed_mentions=allowed_mentions,
                components=components
            ),
            'edit original response'
        )


class InteractionFollowup:
    def __init__(
        self,
        interaction: Interaction,
        client: Client | None
    ) -> None:
        self.interaction = interaction
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            raise InteractionError('interaction is not bound to a client')

        return self._client

    @property
    def webhook(self) -> Route:
        return Route(
            'POST',
            self.client.base.webhook(
                self.interaction.application_id,
                self.interaction.token
            )
        )

    async def send(
        self,
        content: Optional[Nullable[str]] = MISSING,
        *,
        ephemeral: bool = False,
        tts: Optional[bool] = MISSING,
        embeds: Optional[Nullable[list[dict[str, Any]]]] = MISSING,
        allowed_mentions: Optional[Nullable[dict[str, Any]]] = MISSING,
        components: Optional[Nullable[list[MessageComponent]]] = MISSING,
    ) -> bool:
        return await send(
            self.client,
            self.webhook,
            message_payload(
                content,
                ephemeral=ephemeral,
                tts=tts,
                embeds=embeds,
                allowed_mentions=allowed_mentions,
                components=components
            ),
            'followup message'
        )
