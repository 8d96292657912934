"""Resolve the account the token belongs to."""

import httpx
import structlog
from pydantic import ValidationError

from ..exceptions import AuthError
from ..models.account import Account
from .client import DiscordClient

logger = structlog.get_logger()


async def resolve_identity(client: DiscordClient) -> Account:
    """Fetch the current account.

    The search endpoint is scoped by author id, so a run cannot continue
    without it. Never retried.

    Args:
        client: Discord client

    Returns:
        The logged-in account

    Raises:
        AuthError: On transport failure, non-2xx status or an undecodable body
    """
    try:
        response = await client.get_current_user()
    except httpx.TransportError as e:
        logger.error("account_resolve_failed", error=str(e))
        raise AuthError("Failed to log in", str(e)) from e

    if not response.is_success:
        logger.error("account_resolve_failed", status=response.status_code)
        raise AuthError(
            "Failed to log in",
            f"GET /users/@me returned {response.status_code}",
            status_code=response.status_code,
        )

    try:
        account = Account.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        logger.error("account_resolve_failed", error=str(e))
        raise AuthError(
            "Failed to log in", "unexpected /users/@me body",
            status_code=response.status_code,
        ) from e

    logger.info("account_resolved", username=account.username, account_id=account.id)
    return account
