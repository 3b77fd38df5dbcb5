from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from nacl.signing import SigningKey
from orjson import dumps

from slashgate.core.auth import verify_signature
from tests.conftest import ping_payload, post, sign

TIMESTAMP = '1700000000'
BODY = dumps(ping_payload())


def _flip_bit(data: bytes, index: int) -> bytes:
    mutated = bytearray(data)
    mutated[index // 8] ^= 1 << (index % 8)
    return bytes(mutated)


def test_verify_signature_accepts_valid_signature(signing_key: SigningKey) -> None:
    signature = signing_key.sign(TIMESTAMP.encode() + BODY).signature.hex()

    assert verify_signature(signing_key.verify_key, signature, TIMESTAMP, BODY)


@pytest.mark.parametrize('bit', [0, 7, 100, 511])
def test_verify_signature_rejects_mutated_signature(
    signing_key: SigningKey, bit: int
) -> None:
    signature = signing_key.sign(TIMESTAMP.encode() + BODY).signature

    assert not verify_signature(
        signing_key.verify_key,
        _flip_bit(signature, bit).hex(),
        TIMESTAMP,
        BODY
    )


@pytest.mark.parametrize('bit', [0, 13, 40])
def test_verify_signature_rejects_mutated_body(
    signing_key: SigningKey, bit: int
) -> None:
    signature = signing_key.sign(TIMESTAMP.encode() + BODY).signature.hex()

    assert not verify_signature(
        signing_key.verify_key,
        signature,
        TIMESTAMP,
        _flip_bit(BODY, bit)
    )


@pytest.mark.parametrize('bit', [0, 9, 79])
def test_verify_signature_rejects_mutated_timestamp(
    signing_key: SigningKey, bit: int
) -> None:
    signature = signing_key.sign(TIMESTAMP.encode() + BODY).signature.hex()
    timestamp = _flip_bit(TIMESTAMP.encode(), bit).decode('latin-1')

    assert not verify_signature(
        signing_key.verify_key, signature, timestamp, BODY)


def test_verify_signature_rejects_malformed_signatures(
    signing_key: SigningKey
) -> None:
    assert not verify_signature(signing_key.verify_key, 'zz', TIMESTAMP, BODY)
    assert not verify_signature(signing_key.verify_key, 'abcd', TIMESTAMP, BODY)
    assert not verify_signature(signing_key.verify_key, '', TIMESTAMP, BODY)


def test_verify_signature_rejects_other_key(signing_key: SigningKey) -> None:
    signature = signing_key.sign(TIMESTAMP.encode() + BODY).signature.hex()

    assert not verify_signature(
        SigningKey.generate().verify_key, signature, TIMESTAMP, BODY)


def test_valid_ping_is_answered_with_pong(
    client: TestClient, signing_key: SigningKey
) -> None:
    response = post(client, signing_key, ping_payload())

    assert response.status_code == 200
    assert response.json() == {'type': 1}


def test_empty_body_is_not_implemented(client: TestClient) -> None:
    response = client.post('/interaction', content=b'')

    assert response.status_code == 501


def test_missing_signature_headers_are_unauthorized(client: TestClient) -> None:
    response = client.post('/interaction', content=BODY)

    assert response.status_code == 401
    assert response.json() == {'detail': 'Invalid request signature'}


def test_bad_signature_is_unauthorized_before_parsing(
    client: TestClient, signing_key: SigningKey
) -> None:
    body = b'this is not json'
    headers = sign(SigningKey.generate(), body)

    response = client.post('/interaction', content=body, headers=headers)

    assert response.status_code == 401


def test_signed_invalid_json_is_bad_request(
    client: TestClient, signing_key: SigningKey
) -> None:
    body = b'{"type": 1'

    response = client.post(
        '/interaction', content=body, headers=sign(signing_key, body))

    assert response.status_code == 400


def test_signed_non_interaction_is_bad_request(
    client: TestClient, signing_key: SigningKey
) -> None:
    response = post(client, signing_key, {'type': 2, 'id': 'nope'})

    assert response.status_code == 400


def test_healthcheck(client: TestClient) -> None:
    assert client.get('/healthcheck').status_code == 204
