from __future__ import annotations

from typing import Any

from pydantic import Field
import logfire

from slashgate.discord.models.resolved import Resolved
from slashgate.discord.models.base import RawBaseModel
from slashgate.discord.types import Snowflake
from slashgate.discord.enums import (
    ApplicationCommandOptionType,
    ApplicationCommandType,
    SELECT_MENU_TYPES,
    ComponentType
)


__all__ = (
    'ApplicationCommandInteractionData',
    'ButtonInteractionData',
    'ChatInputCommandData',
    'ContextMenuCommandData',
    'MessageComponentInteractionData',
    'ModalSubmitInteractionData',
    'SelectMenuInteractionData',
    'classify_command_data',
    'classify_component_data',
)


class ApplicationCommandInteractionData(RawBaseModel):
    class Option(RawBaseModel):
        name: str
        """Name of the parameter"""
        type: ApplicationCommandOptionType
        """Value of application command option type"""
        value: str | int | float | bool | None = None
        """Value of the option resulting from user input"""
        options: list[ApplicationCommandInteractionData.Option] | None = None
        """Present if this option is a group or subcommand"""
        focused: bool = False
        """`true` if this option is the currently focused option for autocomplete"""

    id: Snowflake
    """`ID` of the invoked command"""
    name: str
    """`name` of the invoked command"""
    type: ApplicationCommandType | int = Field(union_mode='left_to_right')
    """`type` of the invoked command"""
    resolved: Resolved | None = None
    """Converted users + roles + channels + attachments"""
    options: list[ApplicationCommandInteractionData.Option] | None = None
    """Params + values from the user"""
    guild_id: Snowflake | None = None
    """ID of the guild the command is registered to"""


class ChatInputCommandData(ApplicationCommandInteractionData):
    def _find(
        self,
        options: list[ApplicationCommandInteractionData.Option],
        option_type: ApplicationCommandOptionType
    ) -> ApplicationCommandInteractionData.Option | None:
        return next(
            (option for option in options if option.type == option_type),
            None
        )

    def _subcommand_chain(
        self
    ) -> tuple[
        ApplicationCommandInteractionData.Option | None,
        ApplicationCommandInteractionData.Option | None
    ]:
        options = self.options or []

        group = self._find(
            options, ApplicationCommandOptionType.SUB_COMMAND_GROUP)

        subcommand = self._find(
            (group.options or []) if group is not None else options,
            ApplicationCommandOptionType.SUB_COMMAND)

        return group, subcommand

    @property
    def subcommand_path(self) -> str | None:
        """`group/subcommand`, `subcommand`, or None for a flat command"""
        group, subcommand = self._subcommand_chain()

        if subcommand is None:
            return None

        if group is None:
            return subcommand.name

        return f'{group.name}/{subcommand.name}'

    @property
    def leaf_options(self) -> list[ApplicationCommandInteractionData.Option]:
        _, subcommand = self._subcommand_chain()

        if subcommand is not None:
            return subcommand.options or []

        return [
            option
            for option in self.options or []
            if option.type not in {
                ApplicationCommandOptionType.SUB_COMMAND,
                ApplicationCommandOptionType.SUB_COMMAND_GROUP
            }
        ]

    @property
    def arguments(self) -> dict[str, str | int | float | bool | None]:
        return {
            option.name: option.value
            for option in self.leaf_options
        }

    @property
    def focused_option(self) -> ApplicationCommandInteractionData.Option | None:
        return next(
            (option for option in self.leaf_options if option.focused),
            None
        )


class ContextMenuCommandData(ApplicationCommandInteractionData):
    target_id: Snowflake
    """ID of the user or message targeted by a user or message command"""

    @property
    def target(self) -> Any:  # noqa: ANN401
        if self.resolved is None:
            return None

        match self.type:
            case ApplicationCommandType.USER:
                return self.resolved.users.get(self.target_id)
            case ApplicationCommandType.MESSAGE:
                return self.resolved.messages.get(self.target_id)

        return None


class MessageComponentInteractionData(RawBaseModel):
    custom_id: str
    """`custom_id` of the component"""
    component_type: ComponentType | int = Field(union_mode='left_to_right')
    """`type` of the component"""
    resolved: Resolved | None = None
    """Resolved entities from selected options"""


class ButtonInteractionData(MessageComponentInteractionData):
    ...


class SelectMenuInteractionData(MessageComponentInteractionData):
    values: list[str] = []
    """Values the user selected in a select menu component"""


class ModalSubmitInteractionData(RawBaseModel):
    class Input(RawBaseModel):
        type: int
        custom_id: str
        value: str | None = None

    class Row(RawBaseModel):
        type: int = ComponentType.ACTION_ROW.value
        components: list[ModalSubmitInteractionData.Input] = []

    custom_id: str
    """`custom_id` of the modal"""
    components: list[ModalSubmitInteractionData.Row]
    """Values submitted by the user"""

    @property
    def values(self) -> dict[str, str | None]:
        return {
            text_input.custom_id: text_input.value
            for row in self.components
            for text_input in row.components
        }


def classify_command_data(
    data: dict[str, Any]
) -> ApplicationCommandInteractionData:
    match data.get('type'):
        case ApplicationCommandType.CHAT_INPUT.value:
            return ChatInputCommandData.model_validate(data)
        case (
            ApplicationCommandType.USER.value |
            ApplicationCommandType.MESSAGE.value
        ):
            return ContextMenuCommandData.model_validate(data)

    logfire.warn(
        'unknown application command type {command_type}',
        command_type=data.get('type')
    )

    return ApplicationCommandInteractionData.model_validate(data)


def classify_component_data(
    data: dict[str, Any]
) -> MessageComponentInteractionData:
    component_type = data.get('component_type')

    if component_type == ComponentType.BUTTON.value:
        return ButtonInteractionData.model_validate(data)

    if component_type in {
        select_type.value
        for select_type in SELECT_MENU_TYPES
    }:
        return SelectMenuInteractionData.model_validate(data)

    logfire.warn(
        'unknown component type {component_type}',
        component_type=component_type
    )

    return MessageComponentInteractionData.model_validate(data)


ApplicationCommandInteractionData.Option.model_rebuild()
ApplicationCommandInteractionData.model_rebuild()
ChatInputCommandData.model_rebuild()
ContextMenuCommandData.model_rebuild()
ModalSubmitInteractionData.Row.model_rebuild()
ModalSubmitInteractionData.model_rebuild()
