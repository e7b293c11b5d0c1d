"""Helpers shared by the repositories: field validation and guarded gateway calls."""

import asyncio
import logging

from django.core.exceptions import ValidationError

from commerce.conf import commerce_setting
from commerce.domain.exceptions import GatewayFailure, InvalidArgument, RepositoryError

logger = logging.getLogger(__name__)


def validate_record(record, exclude=None):
    """
    Run Django field validation on an unsaved or incoming record.

    Unique and constraint validation are skipped because both query the
    database; the store enforces them on write instead.
    """
    try:
        record.full_clean(exclude=exclude, validate_unique=False, validate_constraints=False)
    except ValidationError as exc:
        raise InvalidArgument(type(record).__name__.lower(), exc.message_dict)


async def call_gateway(gateway, awaitable):
    """
    Await a gateway call, applying COMMERCE["GATEWAY_TIMEOUT"].

    Any error or timeout surfaces as GatewayFailure chained to its cause,
    except repository errors (such as InvalidArgument for a contract
    violation), which pass through unchanged.
    Nothing is retried.
    """
    timeout = commerce_setting("GATEWAY_TIMEOUT")
    try:
        if timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout)
    except asyncio.TimeoutError as exc:
        logger.error("%s gateway timed out after %ss", gateway, timeout)
        raise GatewayFailure(gateway, f"timed out after {timeout}s") from exc
    except RepositoryError:
        raise
    except Exception as exc:
        logger.error("%s gateway failed: %s", gateway, exc)
        raise GatewayFailure(gateway, str(exc)) from exc
