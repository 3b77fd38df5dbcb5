from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any
from time import time

import logfire
import pytest
from fastapi.testclient import TestClient
from nacl.signing import SigningKey
from orjson import dumps, loads

from slashgate.core import AppContext, create_app
from slashgate.discord.types import DISCORD_EPOCH
from slashgate.env import Env

APPLICATION_ID = 111111111111111111
INTERACTION_TOKEN = 'aW50ZXJhY3Rpb24tdG9rZW4'


def pytest_configure() -> None:
    logfire.configure(send_to_logfire=False, console=False)


def snowflake() -> str:
    return str((int(time() * 1000) - DISCORD_EPOCH) << 22)


@dataclass
class FakeResponse:
    status: int = 204
    body: Any = None
    content_type: str | None = None

    @property
    def headers(self) -> dict[str, str]:
        if self.content_type is not None:
            return {'content-type': self.content_type}

        if self.body is None or isinstance(self.body, str):
            return {'content-type': 'text/plain'}

        return {'content-type': 'application/json'}

    async def text(self, encoding: str = 'utf-8') -> str:
        _ = encoding
        if self.body is None:
            return ''

        if isinstance(self.body, str):
            return self.body

        return dumps(self.body).decode()

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None


@dataclass
class FakeCall:
    method: str
    url: str
    headers: dict[str, str]
    json: Any


@dataclass
class FakeSession:
    """stands in for aiohttp.ClientSession, answers from a queue"""
    responses: list[FakeResponse | Exception] = field(default_factory=list)
    calls: list[FakeCall] = field(default_factory=list)
    closed: bool = False

    def queue(self, *responses: FakeResponse | Exception) -> None:
        self.responses.extend(responses)

    def request(
        self,
        method: str,
        url: str,
        *,
        data: bytes | None = None,
        headers: dict[str, str] | None = None
    ) -> FakeResponse:
        self.calls.append(FakeCall(
            method,
            url,
            headers or {},
            loads(data) if data is not None else None
        ))

        response = self.responses.pop(0) if self.responses else FakeResponse()

        if isinstance(response, Exception):
            raise response

        return response

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def signing_key() -> SigningKey:
    return SigningKey.generate()


@pytest.fixture()
def env(signing_key: SigningKey) -> Env:
    return Env(
        application_id=APPLICATION_ID,
        application_secret='application-secret',
        application_public_key=signing_key.verify_key.encode().hex()
    )


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def context(env: Env, session: FakeSession) -> AppContext:
    return AppContext.new(env, session=session)  # type: ignore[arg-type]


@pytest.fixture()
def client(context: AppContext) -> Iterator[TestClient]:
    with TestClient(create_app(context)) as test_client:
        yield test_client


@pytest.fixture()
def logged_errors(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    errors: list[dict[str, Any]] = []

    def capture(msg_template: str, **attributes: Any) -> None:
        errors.append({'msg': msg_template, **attributes})

    monkeypatch.setattr(logfire, 'error', capture)
    return errors


@pytest.fixture()
def logged_warnings(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    warnings: list[dict[str, Any]] = []

    def capture(msg_template: str, **attributes: Any) -> None:
        warnings.append({'msg': msg_template, **attributes})

    monkeypatch.setattr(logfire, 'warn', capture)
    return warnings


def sign(
    signing_key: SigningKey,
    body: bytes,
    timestamp: str = '1700000000'
) -> dict[str, str]:
    signature = signing_key.sign(timestamp.encode() + body).signature

    return {
        'X-Signature-Ed25519': signature.hex(),
        'X-Signature-Timestamp': timestamp,
        'Content-Type': 'application/json'
    }


def user_payload(user_id: str = '222222222222222222') -> dict[str, Any]:
    return {
        'id': user_id,
        'username': 'invoker',
        'discriminator': '0',
        'global_name': 'Invoker'
    }


def interaction_payload(
    interaction_type: int,
    data: dict[str, Any] | None = None,
    **extra: Any
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        'id': snowflake(),
        'application_id': str(APPLICATION_ID),
        'type': interaction_type,
        'token': INTERACTION_TOKEN,
        'version': 1,
        'app_permissions': '2248473465835073',
        'channel_id': '333333333333333333',
        'locale': 'en-US'
    }

    if interaction_type != 1:
        payload['user'] = user_payload()

    if data is not None:
        payload['data'] = data

    payload.update(extra)
    return payload


def ping_payload(**extra: Any) -> dict[str, Any]:
    return interaction_payload(1, **extra)


def command_payload(
    name: str,
    options: list[dict[str, Any]] | None = None,
    command_type: int = 1,
    **data: Any
) -> dict[str, Any]:
    command_data: dict[str, Any] = {
        'id': '444444444444444444',
        'name': name,
        'type': command_type,
        **data
    }

    if options is not None:
        command_data['options'] = options

    return interaction_payload(2, command_data)


def autocomplete_payload(
    name: str,
    options: list[dict[str, Any]]
) -> dict[str, Any]:
    return interaction_payload(4, {
        'id': '444444444444444444',
        'name': name,
        'type': 1,
        'options': options
    })


def component_payload(
    custom_id: str,
    component_type: int = 2,
    **data: Any
) -> dict[str, Any]:
    return interaction_payload(
        3,
        {'custom_id': custom_id, 'component_type': component_type, **data},
        message={
            'id': '555555555555555555',
            'channel_id': '333333333333333333',
            'content': 'hello'
        }
    )


def modal_payload(
    custom_id: str,
    values: dict[str, str]
) -> dict[str, Any]:
    return interaction_payload(5, {
        'custom_id': custom_id,
        'components': [
            {'type': 1, 'components': [
                {'type': 4, 'custom_id': key, 'value': value}
            ]}
            for key, value in values.items()
        ]
    })


def post(
    client: TestClient,
    signing_key: SigningKey,
    payload: Any,
    path: str = '/interaction'
) -> Any:
    body = dumps(payload)
    return client.post(path, content=body, headers=sign(signing_key, body))
