from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient
from nacl.signing import SigningKey

from slashgate.core import AppContext
from slashgate.discord import (
    CommandInteraction,
    InteractionManager,
    InteractionType,
    CallbackHandler,
    CommandHandler,
    Interaction,
    ApplicationCommand
)
from slashgate.errors import HandlerNotFound
from tests.conftest import (
    component_payload,
    command_payload,
    modal_payload,
    ping_payload,
    post
)


def _recorder(calls: list[Any], label: str = '') -> Any:
    async def callback(interaction: Any) -> None:
        calls.append((label, interaction))

    return callback


def test_ping_never_reaches_the_registry(
    client: TestClient,
    context: AppContext,
    signing_key: SigningKey
) -> None:
    calls: list[Any] = []
    context.interactions.register(
        CallbackHandler(InteractionType.PING, 'anything', _recorder(calls)))

    for extra in ({}, {'guild_id': '1'}, {'locale': 'de'}, {'version': 7}):
        response = post(client, signing_key, ping_payload(**extra))

        assert response.status_code == 200
        assert response.json() == {'type': 1}

    assert calls == []


@pytest.mark.parametrize('extra', [
    {'token': None},
    {'channel': {}},
    {'member': 'not a member'},
    {'id': 'not a snowflake', 'application_id': None},
])
def test_ping_is_answered_whatever_the_other_fields(
    client: TestClient,
    signing_key: SigningKey,
    extra: dict[str, Any]
) -> None:
    response = post(client, signing_key, ping_payload(**extra))

    assert response.status_code == 200
    assert response.json() == {'type': 1}


def test_ping_with_only_a_type(
    client: TestClient, signing_key: SigningKey
) -> None:
    response = post(client, signing_key, {'type': 1})

    assert response.status_code == 200
    assert response.json() == {'type': 1}


def test_command_handler_invoked_exactly_once(
    client: TestClient,
    context: AppContext,
    signing_key: SigningKey
) -> None:
    calls: list[Any] = []
    context.interactions.register(CallbackHandler(
        InteractionType.APPLICATION_COMMAND, 'test', _recorder(calls)))

    response = post(client, signing_key, command_payload('test'))

    assert response.status_code == 200
    assert response.text == 'Interaction received.'
    assert len(calls) == 1
    assert isinstance(calls[0][1], CommandInteraction)


def test_dispatch_selects_matching_kind_and_key(context: AppContext) -> None:
    manager = context.interactions
    calls: list[Any] = []

    manager.register(
        CallbackHandler(
            InteractionType.MESSAGE_COMPONENT, 'test', _recorder(calls, 'a')),
        CallbackHandler(
            InteractionType.APPLICATION_COMMAND, 'other', _recorder(calls, 'b')),
        CallbackHandler(
            InteractionType.APPLICATION_COMMAND, 'test', _recorder(calls, 'c')),
        CallbackHandler(
            InteractionType.MODAL_SUBMIT, 'test', _recorder(calls, 'd')),
    )

    interaction = Interaction.from_payload(command_payload('test'))

    assert manager.handler_for(interaction) is manager.handlers[2]


def test_duplicate_handlers_earliest_wins(
    client: TestClient,
    context: AppContext,
    signing_key: SigningKey,
    logged_warnings: list[dict[str, Any]]
) -> None:
    calls: list[Any] = []

    context.interactions.register(
        CallbackHandler(
            InteractionType.MESSAGE_COMPONENT, 'x', _recorder(calls, 'first')),
        CallbackHandler(
            InteractionType.MESSAGE_COMPONENT, 'x', _recorder(calls, 'second'))
    )

    response = post(client, signing_key, component_payload('x'))

    assert response.status_code == 200
    assert [label for label, _ in calls] == ['first']
    assert len(logged_warnings) == 1


def test_component_without_handlers_is_not_found(
    client: TestClient,
    signing_key: SigningKey,
    logged_errors: list[dict[str, Any]]
) -> None:
    response = post(client, signing_key, component_payload('x'))

    assert response.status_code == 404
    assert response.content == b''
    assert len(logged_errors) == 1
    assert logged_errors[0]['status_code'] == 404
    assert logged_errors[0]['key'] == 'x'


def test_server_keeps_serving_after_a_miss(
    client: TestClient,
    context: AppContext,
    signing_key: SigningKey,
    logged_errors: list[dict[str, Any]]
) -> None:
    calls: list[Any] = []
    context.interactions.register(CallbackHandler(
        InteractionType.MODAL_SUBMIT, 'form', _recorder(calls)))

    assert post(
        client, signing_key, modal_payload('unknown', {'a': 'b'})
    ).status_code == 404

    assert post(
        client, signing_key, modal_payload('form', {'a': 'b'})
    ).status_code == 200

    assert post(client, signing_key, ping_payload()).json() == {'type': 1}
    assert len(calls) == 1
    assert len(logged_errors) == 1


def test_handler_fault_is_logged_and_not_found(
    client: TestClient,
    context: AppContext,
    signing_key: SigningKey,
    logged_errors: list[dict[str, Any]]
) -> None:
    @context.interactions.command(ApplicationCommand(
        name='broken', description='always fails'))
    async def broken(interaction: CommandInteraction) -> None:
        raise RuntimeError('handler exploded')

    response = post(client, signing_key, command_payload('broken'))

    assert response.status_code == 404
    assert len(logged_errors) == 1
    assert logged_errors[0]['status_code'] == 400
    assert isinstance(logged_errors[0]['_exc_info'], RuntimeError)


def test_unknown_interaction_type_degrades_to_not_found(
    client: TestClient,
    signing_key: SigningKey,
    logged_errors: list[dict[str, Any]],
    logged_warnings: list[dict[str, Any]]
) -> None:
    payload = command_payload('test')
    payload['type'] = 42

    response = post(client, signing_key, payload)

    assert response.status_code == 404
    assert len(logged_warnings) == 1
    assert len(logged_errors) == 1


def test_subclassed_command_handler(
    client: TestClient,
    context: AppContext,
    signing_key: SigningKey
) -> None:
    calls: list[str] = []

    class Hello(CommandHandler):
        async def handle(self, interaction: CommandInteraction) -> None:
            calls.append(interaction.author.username)

    handler = Hello(ApplicationCommand(name='hello', description='say hi'))
    context.interactions.register(None, handler)

    assert handler.key == 'hello'
    assert post(
        client, signing_key, command_payload('hello')).status_code == 200
    assert calls == ['invoker']


def test_handler_for_raises_when_nothing_matches() -> None:
    manager = InteractionManager()

    with pytest.raises(HandlerNotFound):
        manager.handler_for(Interaction.from_payload(command_payload('test')))


@pytest.mark.anyio
async def test_handle_returns_pong_for_ping() -> None:
    response = await InteractionManager().handle(ping_payload())

    assert response.status_code == 200
    assert response.body == b'{"type":1}'
