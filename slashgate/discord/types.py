from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from pydantic_core import CoreSchema, core_schema

if TYPE_CHECKING:
    from pydantic.json_schema import JsonSchemaValue
    from pydantic import GetJsonSchemaHandler


__all__ = (
    'DISCORD_EPOCH',
    'Snowflake',
    'snowflake_time',
)


DISCORD_EPOCH = 1420070400000


class Snowflake(int):
    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        _source_type: type[Snowflake] | None,
        _handler: GetJsonSchemaHandler,
    ) -> CoreSchema:
        # ? discord sends snowflakes as strings, accept both and send strings back
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.int_schema(),
            serialization=core_schema.to_string_ser_schema(when_used='json')
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls,
        _core_schema: CoreSchema,
        _handler: GetJsonSchemaHandler,
    ) -> JsonSchemaValue:
        return {'type': 'string', 'format': 'snowflake'}

    @property
    def timestamp(self) -> int:
        """milliseconds since the unix epoch"""
        return (self >> 22) + DISCORD_EPOCH


def snowflake_time(snowflake: int) -> datetime:
    return datetime.fromtimestamp(
        ((snowflake >> 22) + DISCORD_EPOCH) / 1000,
        tz=timezone.utc
    )
