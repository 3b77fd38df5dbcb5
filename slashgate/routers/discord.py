from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response
from pydantic import ValidationError
from orjson import loads, JSONDecodeError
import logfire

from slashgate.core.auth import discord_key_validator
from slashgate.discord.enums import StatusCode


__all__ = (
    'build_router',
)


def build_router(path: str = '/interaction') -> APIRouter:
    router = APIRouter(include_in_schema=False)

    @router.post(path)
    async def post__interaction(
        request: Request,
        body: Annotated[bytes, Depends(discord_key_validator)]
    ) -> Response:
        try:
            payload = loads(body)
        except JSONDecodeError as e:
            raise HTTPException(
                StatusCode.BAD_REQUEST, 'Invalid request body') from e

        try:
            return await request.app.state.context.interactions.handle(payload)
        except ValidationError as e:
            logfire.warn(
                'rejected malformed interaction payload',
                errors=e.error_count()
            )
            raise HTTPException(
                StatusCode.BAD_REQUEST, 'Invalid interaction') from e

    return router
