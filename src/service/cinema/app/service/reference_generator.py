import secrets
from typing import Awaitable, Callable

from src.platform.exception.exceptions import InternalError


MAX_ATTEMPTS = 10


def booking_reference() -> str:
    return f'PVR{secrets.randbelow(900000) + 100000}'


def transaction_id() -> str:
    return f'TXN{secrets.randbelow(900000) + 100000}'


async def unique_code(
    generate: Callable[[], str], exists: Callable[[str], Awaitable[bool]]
) -> str:
    for _ in range(MAX_ATTEMPTS):
        code = generate()
        if not await exists(code):
            return code
    raise InternalError('Could not allocate a unique reference')
