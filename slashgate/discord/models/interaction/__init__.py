from __future__ import annotations

from typing import Any, ClassVar, Self, TYPE_CHECKING

from pydantic import (
    ValidationInfo,
    field_validator,
    model_validator,
    PrivateAttr,
    Field
)
import logfire

from slashgate.discord.models.base import RawBaseModel
from slashgate.discord.models.channel import Channel, Message
from slashgate.discord.models.user import Member, User
from slashgate.discord.types import Snowflake
from slashgate.discord.enums import InteractionType

from .response import InteractionResponse, InteractionFollowup
from .data import (
    ApplicationCommandInteractionData,
    MessageComponentInteractionData,
    ModalSubmitInteractionData,
    SelectMenuInteractionData,
    ContextMenuCommandData,
    ButtonInteractionData,
    ChatInputCommandData,
    classify_component_data,
    classify_command_data
)

if TYPE_CHECKING:
    from slashgate.client import Client


__all__ = (
    'ApplicationCommandInteractionData',
    'AutocompleteInteraction',
    'ButtonInteractionData',
    'ChatInputCommandData',
    'CommandInteraction',
    'ComponentInteraction',
    'ContextMenuCommandData',
    'Interaction',
    'InteractionFollowup',
    'InteractionResponse',
    'MessageComponentInteractionData',
    'ModalSubmitInteraction',
    'ModalSubmitInteractionData',
    'PingInteraction',
    'SelectMenuInteractionData',
)


class Interaction(RawBaseModel):
    id: Snowflake
    """ID of the interaction"""
    application_id: Snowflake
    """ID of the application this interaction is for"""
    type: InteractionType | int = Field(union_mode='left_to_right')
    """Type of interaction"""
    data: dict[str, Any] | None = None
    """Interaction data payload"""
    guild_id: Snowflake | None = None
    """Guild that the interaction was sent from"""
    channel: Channel | None = None
    """Channel that the interaction was sent from"""
    channel_id: Snowflake | None = None
    """Channel that the interaction was sent from"""
    member: Member | None = None
    """Guild member data for the invoking user, including permissions"""
    user: User | None = None
    """User object for the invoking user, if invoked in a DM"""
    token: str = Field(repr=False)
    """Continuation token for responding to the interaction"""
    version: int = 1
    """Read-only property, always `1`"""
    app_permissions: str | None = None
    """Bitwise set of permissions the app has in the source location of the interaction"""
    locale: str | None = None
    """Selected language of the invoking user"""
    guild_locale: str | None = None
    """Guild's preferred locale, if invoked in a guild"""
    # ? library stuff
    _response: InteractionResponse = PrivateAttr()
    _followup: InteractionFollowup = PrivateAttr()

    @model_validator(mode='after')
    def bind_client(self, info: ValidationInfo) -> Self:
        client = (info.context or {}).get('client')
        self._response = InteractionResponse(self, client)
        self._followup = InteractionFollowup(self, client)
        return self

    @classmethod
    def from_payload(
        cls,
        payload: dict[str, Any],
        client: Client | None = None
    ) -> Interaction:
        """build the concrete interaction for a verified payload"""
        context = {'client': client}

        if not isinstance(payload, dict):
            # ? raises the ValidationError the route turns into a 400
            return Interaction.model_validate(payload, context=context)

        match payload.get('type'):
            case InteractionType.PING.value:
                model = PingInteraction
            case InteractionType.APPLICATION_COMMAND.value:
                model = CommandInteraction
            case InteractionType.MESSAGE_COMPONENT.value:
                model = ComponentInteraction
            case InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE.value:
                model = AutocompleteInteraction
            case InteractionType.MODAL_SUBMIT.value:
                model = ModalSubmitInteraction
            case _:
                logfire.warn(
                    'unknown interaction type {interaction_type}',
                    interaction_type=payload.get('type')
                )
                model = Interaction

        return model.model_validate(payload, context=context)

    @property
    def response(self) -> InteractionResponse:
        return self._response

    @property
    def followup(self) -> InteractionFollowup:
        return self._followup

    @property
    def key(self) -> str | None:
        """the value handlers are matched against"""
        return None

    @property
    def author(self) -> User | None:
        if self.member is not None and self.member.user is not None:
            return self.member.user

        return self.user


class PingInteraction(Interaction):
    acknowledgement: ClassVar[dict[str, int]] = {'type': 1}


class RespondableInteraction(Interaction):
    @model_validator(mode='after')
    def ensure_single_invoker(self) -> Self:
        if (self.member is None) == (self.user is None):
            raise ValueError(
                'interaction must carry exactly one of member or user'
            )

        if self.member is not None and self.member.user is None:
            raise ValueError('interaction member is missing its user')

        return self

    @property
    def author(self) -> User:
        author = super().author
        assert author is not None
        return author


class CommandInteraction(RespondableInteraction):
    data: ApplicationCommandInteractionData

    @field_validator('data', mode='before')
    @classmethod
    def classify_data(cls, value: Any) -> Any:  # noqa: ANN401
        if isinstance(value, dict):
            return classify_command_data(value)

        return value

    @property
    def command_name(self) -> str:
        return self.data.name

    @property
    def command_id(self) -> Snowflake:
        return self.data.id

    @property
    def key(self) -> str:
        return self.data.name


class AutocompleteInteraction(RespondableInteraction):
    data: ChatInputCommandData

    @property
    def command_name(self) -> str:
        return self.data.name

    @property
    def focused_option(self) -> ApplicationCommandInteractionData.Option | None:
        return self.data.focused_option

    @property
    def key(self) -> str:
        return self.data.name


class ComponentInteraction(RespondableInteraction):
    data: MessageComponentInteractionData
    message: Message | None = None
    """the message the component was attached to"""

    @field_validator('data', mode='before')
    @classmethod
    def classify_data(cls, value: Any) -> Any:  # noqa: ANN401
        if isinstance(value, dict):
            return classify_component_data(value)

        return value

    @property
    def custom_id(self) -> str:
        return self.data.custom_id

    @property
    def key(self) -> str:
        return self.data.custom_id


class ModalSubmitInteraction(RespondableInteraction):
    data: ModalSubmitInteractionData
    message: Message | None = None
    """present when the modal was opened from a component"""

    @property
    def custom_id(self) -> str:
        return self.data.custom_id

    @property
    def key(self) -> str:
        return self.data.custom_id
