from __future__ import annotations

from datetime import datetime

from slashgate.discord.types import Snowflake

from .base import RawBaseModel


__all__ = (
    'Member',
    'User',
)


class User(RawBaseModel):
    id: Snowflake
    """the user's id"""
    username: str
    """the user's username, not unique across the platform"""
    discriminator: str = '0'
    """the user's Discord-tag"""
    global_name: str | None = None
    """the user's display name, if it is set. For bots, this is the application name"""
    avatar: str | None = None
    """the user's avatar hash"""
    bot: bool = False
    """whether the user belongs to an OAuth2 application"""

    @property
    def display_name(self) -> str:
        return self.global_name or self.username

    @property
    def mention(self) -> str:
        return f'<@{self.id}>'


class Member(RawBaseModel):
    user: User | None = None
    """the user this guild member represents, always present on interactions"""
    nick: str | None = None
    """this user's guild nickname"""
    avatar: str | None = None
    roles: list[Snowflake] = []
    """array of role object ids"""
    joined_at: datetime | None = None
    permissions: str | None = None
    """total permissions of the member in the channel, including overwrites, returned when in the interaction object"""

    @property
    def display_name(self) -> str | None:
        if self.nick:
            return self.nick

        return self.user.display_name if self.user is not None else None
