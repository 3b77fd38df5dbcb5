from __future__ import annotations

from typing import Any

from slashgate.discord.types import Snowflake

from .channel import Channel, Message
from .base import RawBaseModel
from .user import Member, User


__all__ = (
    'Resolved',
)


class Resolved(RawBaseModel):
    users: dict[Snowflake, User] = {}
    """the ids and User objects"""
    members: dict[Snowflake, Member] = {}
    """the ids and partial Member objects, missing `user`, `deaf` and `mute`"""
    roles: dict[Snowflake, dict[str, Any]] = {}
    channels: dict[Snowflake, Channel] = {}
    """the ids and partial Channel objects"""
    messages: dict[Snowflake, Message] = {}
    attachments: dict[Snowflake, dict[str, Any]] = {}
