from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, Field, field_validator, model_validator
from regex import compile

from slashgate.discord.enums import (
    ApplicationCommandOptionType,
    ApplicationCommandType,
    ChannelType,
    Permission
)


__all__ = (
    'ApplicationCommand',
    'COMMAND_NAME_PATTERN',
)


COMMAND_NAME_PATTERN = compile(
    r'^[-_\p{L}\p{N}\p{Devanagari}\p{Thai}]{1,32}$'
)
MAX_OPTIONS = 25
MAX_CHOICES = 25

SUBCOMMAND_TYPES = frozenset({
    ApplicationCommandOptionType.SUB_COMMAND,
    ApplicationCommandOptionType.SUB_COMMAND_GROUP
})
CHOICE_TYPES = frozenset({
    ApplicationCommandOptionType.STRING,
    ApplicationCommandOptionType.INTEGER,
    ApplicationCommandOptionType.NUMBER
})
NUMERIC_TYPES = frozenset({
    ApplicationCommandOptionType.INTEGER,
    ApplicationCommandOptionType.NUMBER
})


def _check_name(name: str, lowercase: bool) -> None:
    if COMMAND_NAME_PATTERN.match(name) is None:
        raise ValueError(f'invalid name {name!r}')

    if lowercase and name != name.lower():
        raise ValueError(f'name {name!r} must be lowercase')


def _encode_permissions(value: Permission | int | str | None) -> str | None:
    match value:
        case None:
            return None
        case Permission():
            return str(value.value)
        case bool():
            raise ValueError('permissions must be a string-encoded integer')
        case int():
            return str(value)

    if not isinstance(value, str) or not value.isdigit():
        raise ValueError('permissions must be a string-encoded integer')

    return value


def _check_children(
    parent: ApplicationCommandOptionType | ApplicationCommandType,
    options: list[ApplicationCommand.Option] | None
) -> None:
    """groups hold subcommands, subcommands hold leaf options, leaves hold nothing"""
    if not options:
        return

    if len(options) > MAX_OPTIONS:
        raise ValueError(f'at most {MAX_OPTIONS} options are allowed')

    names = [option.name for option in options]
    if len(names) != len(set(names)):
        raise ValueError('option names must be unique')

    match parent:
        case ApplicationCommandType.CHAT_INPUT:
            nested = [option.type in SUBCOMMAND_TYPES for option in options]
            if any(nested) and not all(nested):
                raise ValueError(
                    'subcommands and groups cannot be mixed with other options'
                )
        case ApplicationCommandType():
            raise ValueError('context menu commands cannot have options')
        case ApplicationCommandOptionType.SUB_COMMAND_GROUP:
            if any(
                option.type != ApplicationCommandOptionType.SUB_COMMAND
                for option in options
            ):
                raise ValueError(
                    'subcommand groups can only contain subcommands'
                )
        case ApplicationCommandOptionType.SUB_COMMAND:
            if any(option.type in SUBCOMMAND_TYPES for option in options):
                raise ValueError(
                    'subcommands cannot contain subcommands or groups'
                )
        case _:
            raise ValueError(f'{parent.name.lower()} options cannot be nested')


class ApplicationCommand(BaseModel):
    class Option(BaseModel):
        class Choice(BaseModel):
            name: str = Field(min_length=1, max_length=100)
            value: str | int | float

            def as_payload(self) -> dict[str, Any]:
                return {
                    'name': self.name,
                    'value': self.value
                }

        type: ApplicationCommandOptionType
        name: str
        description: str = Field(min_length=1, max_length=100)
        required: bool = False
        choices: list[ApplicationCommand.Option.Choice] | None = None
        options: list[ApplicationCommand.Option] | None = None
        channel_types: list[ChannelType] | None = None
        min_value: int | float | None = None
        max_value: int | float | None = None
        min_length: int | None = Field(None, ge=0, le=6000)
        max_length: int | None = Field(None, ge=1, le=6000)
        autocomplete: bool = False

        @model_validator(mode='after')
        def validate_option(self) -> Self:
            _check_name(self.name, lowercase=True)

            if self.choices is not None and self.autocomplete:
                raise ValueError(
                    'choices and autocomplete cannot both be set'
                )

            if (
                (self.choices is not None or self.autocomplete) and
                self.type not in CHOICE_TYPES
            ):
                raise ValueError(
                    'choices and autocomplete are only valid on '
                    'string, integer and number options'
                )

            if self.choices is not None and len(self.choices) > MAX_CHOICES:
                raise ValueError(f'at most {MAX_CHOICES} choices are allowed')

            if (
                self.channel_types is not None and
                self.type != ApplicationCommandOptionType.CHANNEL
            ):
                raise ValueError('channel_types is only valid on channel options')

            if (
                (self.min_value is not None or self.max_value is not None) and
                self.type not in NUMERIC_TYPES
            ):
                raise ValueError(
                    'min_value and max_value are only valid on '
                    'integer and number options'
                )

            if (
                (self.min_length is not None or self.max_length is not None) and
                self.type != ApplicationCommandOptionType.STRING
            ):
                raise ValueError(
                    'min_length and max_length are only valid on string options'
                )

            if self.required and self.type in SUBCOMMAND_TYPES:
                raise ValueError('subcommands cannot be required')

            _check_children(self.type, self.options)

            return self

        def as_payload(self) -> dict[str, Any]:
            json: dict[str, Any] = {
                'type': self.type.value,
                'name': self.name,
                'description': self.description
            }

            if self.required:
                json['required'] = True

            if self.choices is not None:
                json['choices'] = [
                    choice.as_payload()
                    for choice in self.choices
                ]

            if self.options is not None:
                json['options'] = [
                    option.as_payload()
                    for option in self.options
                ]

            if self.channel_types is not None:
                json['channel_types'] = [
                    channel_type.value
                    for channel_type in self.channel_types
                ]

            for field in ('min_value', 'max_value', 'min_length', 'max_length'):
                if (value := getattr(self, field)) is not None:
                    json[field] = value

            if self.autocomplete:
                json['autocomplete'] = True

            return json

    name: str
    description: str = ''
    type: ApplicationCommandType = ApplicationCommandType.CHAT_INPUT
    options: list[ApplicationCommand.Option] | None = None
    default_member_permissions: str | None = None
    """string-encoded permission bitmask, `None` lets everyone use the command"""
    dm_permission: bool | None = None
    nsfw: bool | None = None

    @field_validator('default_member_permissions', mode='before')
    @classmethod
    def encode_permissions(
        cls,
        value: Permission | int | str | None
    ) -> str | None:
        return _encode_permissions(value)

    @model_validator(mode='after')
    def validate_command(self) -> Self:
        match self.type:
            case ApplicationCommandType.CHAT_INPUT:
                _check_name(self.name, lowercase=True)

                if not 1 <= len(self.description) <= 100:
                    raise ValueError(
                        'chat input descriptions must be 1-100 characters'
                    )
            case _:
                # ? context menu names are free text, spaces and case included
                if not 1 <= len(self.name) <= 32:
                    raise ValueError('command names must be 1-32 characters')

                if self.description:
                    raise ValueError(
                        'context menu commands cannot have a description'
                    )

        _check_children(self.type, self.options)

        return self

    def add_option(self, option: ApplicationCommand.Option) -> Self:
        return self.add_options(option)

    def add_options(self, *options: ApplicationCommand.Option) -> Self:
        merged = [*(self.options or []), *options]
        _check_children(self.type, merged)
        self.options = merged
        return self

    def set_default_member_permissions(
        self,
        permissions: Permission | int | str | None
    ) -> Self:
        self.default_member_permissions = _encode_permissions(permissions)
        return self

    def set_dm_allowed(self, allowed: bool = True) -> Self:
        self.dm_permission = allowed
        return self

    def set_nsfw(self, nsfw: bool = True) -> Self:
        self.nsfw = nsfw
        return self

    def as_payload(self) -> dict[str, Any]:
        json: dict[str, Any] = {
            'name': self.name,
            'description': self.description,
            'type': self.type.value,
            'default_member_permissions': self.default_member_permissions
        }

        if self.options is not None:
            json['options'] = [
                option.as_payload()
                for option in self.options
            ]

        if self.dm_permission is not None:
            json['dm_permission'] = self.dm_permission

        if self.nsfw is not None:
            json['nsfw'] = self.nsfw

        return json


ApplicationCommand.Option.model_rebuild()
ApplicationCommand.model_rebuild()
