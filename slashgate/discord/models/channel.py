from __future__ import annotations

from typing import Any

from pydantic import Field

from slashgate.discord.enums import ChannelType
from slashgate.discord.types import Snowflake

from .base import RawBaseModel
from .user import User


__all__ = (
    'Channel',
    'Message',
)


class Channel(RawBaseModel):
    id: Snowflake
    type: ChannelType | int = Field(union_mode='left_to_right')
    guild_id: Snowflake | None = None
    name: str | None = None
    parent_id: Snowflake | None = None
    permissions: str | None = None
    """computed permissions for the invoking user, only present on resolved channels"""


class Message(RawBaseModel):
    id: Snowflake
    channel_id: Snowflake
    author: User | None = None
    content: str = ''
    flags: int = 0
    components: list[dict[str, Any]] = []
    """raw component payloads, rebuilt with `as_payload` models when edited"""
