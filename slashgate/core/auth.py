from typing import Annotated

from fastapi import HTTPException, Request, Header
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from slashgate.discord.enums import StatusCode


__all__ = (
    'discord_key_validator',
    'verify_signature',
)


def verify_signature(
    verify_key: VerifyKey,
    signature: str,
    timestamp: str,
    body: bytes
) -> bool:
    """ed25519 detached signature over timestamp + raw body"""
    try:
        verify_key.verify(
            timestamp.encode() + body,
            bytes.fromhex(signature))
    except (BadSignatureError, ValueError):
        # ? ValueError covers bad hex and signatures of the wrong length
        return False

    return True


async def discord_key_validator(
    request: Request,
    x_signature_ed25519: Annotated[str | None, Header()] = None,
    x_signature_timestamp: Annotated[str | None, Header()] = None,
) -> bytes:
    """returns the raw body, nothing may parse it before this passes"""
    body = await request.body()

    if not body:
        raise HTTPException(
            StatusCode.NOT_IMPLEMENTED, 'Invalid request signature')

    if (
        x_signature_ed25519 is None or
        x_signature_timestamp is None or
        not verify_signature(
            request.app.state.context.client.verify_key,
            x_signature_ed25519,
            x_signature_timestamp,
            body)
    ):
        raise HTTPException(
            StatusCode.UNAUTHORIZED, 'Invalid request signature')

    return body
