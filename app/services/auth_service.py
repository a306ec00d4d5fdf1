import hmac
from typing import Annotated

from fastapi import Depends, Request
from loguru import logger

from app.core.config import Settings, get_settings
from app.core.exceptions import Unauthorized


def verify_header_value(expected: str, provided: str | None) -> bool:
    if provided is None:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), provided.encode("utf-8"))


async def verify_webhook_secret(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Rejects the request when a shared-secret header is configured and does not match."""
    auth = settings.auth
    if not auth.enabled:
        return

    provided = request.headers.get(auth.header_name)
    if not verify_header_value(auth.header_value.get_secret_value(), provided):
        logger.warning(f"Rejected webhook call without valid '{auth.header_name}' header")
        raise Unauthorized("Invalid or missing webhook secret")
