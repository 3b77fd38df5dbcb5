from __future__ import annotations

from typing import Any, TYPE_CHECKING

from pydantic_core import ValidationError
import logfire

if TYPE_CHECKING:
    from slashgate.discord.models.interaction import Interaction


__all__ = (
    'BadRequest',
    'BaseSlashgateException',
    'Conflict',
    'Forbidden',
    'HTTPException',
    'HandlerNotFound',
    'InteractionError',
    'NotFound',
    'ServerError',
    'Unauthorized',
    'on_interaction_error',
)


class BaseSlashgateException(Exception):
    def __init__(self, *args, **kwargs) -> None:  # noqa: ANN002, ANN003
        super().__init__(*args, **kwargs)


class HTTPException(BaseSlashgateException):
    status_code: int = 0

    def __init__(
        self,
        detail: Any | None = None,  # noqa: ANN401
        status_code: int | None = None
    ) -> None:
        self.detail = detail

        if status_code is not None:
            self.status_code = status_code

        super().__init__(detail)


class BadRequest(HTTPException):
    status_code: int = 400


class Unauthorized(HTTPException):
    status_code: int = 401


class Forbidden(HTTPException):
    status_code: int = 403


class NotFound(HTTPException):
    status_code: int = 404


class Conflict(HTTPException):
    status_code: int = 409


class ServerError(HTTPException):
    status_code: int = 500


class HandlerNotFound(NotFound):
    ...


class InteractionError(BaseSlashgateException):
    """raised when an interaction response is used incorrectly"""


def error_status(error: BaseException) -> int:
    match error:
        case HTTPException():
            return error.status_code or 400
        case ValidationError():
            return 400

    return getattr(error, 'status_code', None) or 400


def on_interaction_error(
    interaction: Interaction,
    error: BaseException
) -> int:
    status_code = error_status(error)

    logfire.error(
        '{type} interaction {key} failed with status {status_code}',
        type=getattr(interaction.type, 'name', interaction.type),
        key=interaction.key,
        interaction_id=str(interaction.id),
        status_code=status_code,
        _exc_info=(
            None
            if isinstance(error, HandlerNotFound) else
            error.with_traceback(error.__traceback__)
        )
    )

    return status_code
