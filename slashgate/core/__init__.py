from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from logging import getLogger, Filter, LogRecord
from typing import Any

from fastapi import FastAPI, Response, Request, WebSocket
from fastapi.responses import JSONResponse
import logfire

from slashgate.routers.discord import build_router
from slashgate.version import VERSION
from slashgate.env import Env

from .context import AppContext


__all__ = (
    'AppContext',
    'configure_logging',
    'create_app',
)


class LocalHealthcheckFilter(Filter):
    def filter(self, record: LogRecord) -> bool:
        return not bool(
            isinstance(record.args, tuple) and
            len(record.args) == 5 and
            record.args[1] == 'GET' and
            record.args[2] == '/healthcheck' and
            record.args[4] == 204
        )


def configure_logging(env: Env) -> None:
    logfire.configure(
        service_name='slashgate' + ('-dev' if env.dev else ''),
        service_version=VERSION,
        token=env.logfire_token or None,
        send_to_logfire='if-token-present',
        environment=env.environment,
        scrubbing=False if env.dev else None,
        console=False if env.logfire_token else None
    )

    getLogger('uvicorn.access').addFilter(LocalHealthcheckFilter())


def interaction_redaction(
    env: Env
) -> Callable[[Request | WebSocket, dict[str, Any]], dict[str, Any] | None]:
    def live_discord_redaction(
        request: Request | WebSocket,
        attributes: dict[str, Any]
    ) -> dict[str, Any] | None:
        if env.dev:
            return attributes

        # ? interaction payloads carry response tokens
        if request.url.path == env.interaction_path:
            return None

        return attributes

    return live_discord_redaction


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    context: AppContext = app.state.context

    with logfire.span('starting slashgate'):
        await context.client.start()

        if context.push_commands:
            await context.commands.push(context.client)

    logfire.info(
        'listening for interactions on {path}',
        path=context.env.interaction_path,
        commands=len(context.commands),
        handlers=len(context.interactions)
    )

    yield

    await context.client.close()
    logfire.info('shutting down')


def create_app(context: AppContext) -> FastAPI:
    env = context.env

    app = FastAPI(
        title='slashgate',
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        version=VERSION,
        debug=env.dev
    )

    app.state.context = context
    app.include_router(build_router(env.interaction_path))

    @app.get(
        '/',
        include_in_schema=False)
    async def get__root() -> Response:
        return JSONResponse({
            'message': 'slashgate interaction endpoint',
            'version': VERSION
        })

    @app.get(
        '/healthcheck',
        status_code=204,
        include_in_schema=False)
    async def get__healthcheck() -> Response:
        return Response(status_code=204)

    if env.logfire_token:
        logfire.instrument_aiohttp_client()
        logfire.instrument_fastapi(
            app,
            capture_headers=app.debug,
            request_attributes_mapper=interaction_redaction(env),
            excluded_urls=['/healthcheck']
        )

    return app
