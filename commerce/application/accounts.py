"""
Account Repository

Owns account persistence, the email-uniqueness invariant and the welcome
notification sent after an account is created.

Core guarantees:

- Fail fast: a missing record or a field validation error raises
  InvalidArgument before any store write or gateway call.
- Uniqueness: emails are compared case-sensitively by the UNIQUE
  constraint on Account.email. There is no separate check before the
  write, so two concurrent add() calls with the same email cannot both
  succeed. The loser receives EmailAlreadyInUse.
- Full replacement: update() overwrites every stored column with the
  incoming record. There is no partial update.
- Notification ordering: the welcome message is sent only after the
  insert has committed.

Open policy:

If the notification gateway fails after the account has been committed,
COMMERCE["WELCOME_NOTIFICATION_FAILURE"] decides the outcome:
"propagate" (default) leaves the account stored and raises GatewayFailure,
"suppress" logs the failure and returns the account, and "compensate"
removes the account before raising.
"""

import logging
from dataclasses import dataclass, field

from django.db import IntegrityError
from django.db.models import Q

from commerce.application.support import call_gateway, validate_record
from commerce.conf import welcome_notification_policy
from commerce.domain.exceptions import (
    AccountNotFound,
    EmailAlreadyInUse,
    GatewayFailure,
    InvalidArgument,
)
from commerce.domain.gateways import NotificationGateway
from commerce.infrastructure.gateways import get_notification_gateway
from commerce.infrastructure.store import EntityStore
from commerce.models import Account, Order

logger = logging.getLogger(__name__)

WELCOME_SUBJECT = "Welcome"
WELCOME_BODY = "Welcome {first_name} to our platform!"


@dataclass
class AccountWithOrders:
    """An account together with every order that referenced it at lookup time."""

    account: Account
    orders: list = field(default_factory=list)


def _require_email(email):
    if email is None or not str(email).strip():
        raise InvalidArgument("email", "Email cannot be null or empty.")


class AccountRepository:
    def __init__(self, store: EntityStore | None = None, notifications: NotificationGateway | None = None):
        self.store = store if store is not None else EntityStore()
        self.notifications = notifications if notifications is not None else get_notification_gateway()

    async def list_all(self):
        return await self.store.query_all(Account)

    async def get_by_id(self, account_id):
        """Return the account or None when no account has that key."""
        return await self.store.find_by_key(Account, account_id)

    async def get_with_orders(self, account_id):
        """
        Load an account and all of its orders in one operation.

        The orders are fetched by an explicit second query, so the result
        reflects every order stored at call time. Returns None when the
        account does not exist.
        """
        account = await self.store.find_by_key(Account, account_id)
        if account is None:
            return None

        orders = await self.store.query_where(Order, Q(account_id=account_id))
        return AccountWithOrders(account=account, orders=orders)

    async def add(self, account):
        if account is None:
            raise InvalidArgument("account", "Account is required.")

        validate_record(account)

        # The key is always assigned by the store.
        account.pk = None
        try:
            await self.store.insert(account)
        except IntegrityError:
            logger.info("Duplicate email rejected: email=%s", account.email)
            raise EmailAlreadyInUse(account.email)

        logger.info("Account created: account=%s", account.pk)

        await self._welcome(account)
        return account

    async def update(self, account):
        if account is None:
            raise InvalidArgument("account", "Account is required.")

        validate_record(account)

        try:
            replaced = await self.store.replace(account)
        except IntegrityError:
            logger.info(
                "Duplicate email rejected on update: account=%s email=%s",
                account.pk, account.email,
            )
            raise EmailAlreadyInUse(account.email)

        if not replaced:
            raise AccountNotFound(account.pk)

        logger.info("Account updated: account=%s", account.pk)
        return account

    async def delete(self, account_id):
        """
        Remove an account. Returns False when it did not exist.

        Orders owned by the account are left in place.
        """
        removed = await self.store.remove(Account, account_id)
        if removed:
            logger.info("Account deleted: account=%s", account_id)
        return removed

    async def exists(self, account_id):
        return await self.store.any_matching(Account, Q(pk=account_id))

    async def email_exists(self, email):
        _require_email(email)
        return await self.store.any_matching(Account, Q(email=email))

    async def send_notification(self, email, subject, body):
        _require_email(email)
        await call_gateway("notification", self.notifications.send(email, subject, body))

    async def _welcome(self, account):
        body = WELCOME_BODY.format(first_name=account.first_name)
        try:
            await self.send_notification(account.email, WELCOME_SUBJECT, body)
        except GatewayFailure:
            policy = welcome_notification_policy()
            if policy == "suppress":
                logger.exception("Welcome notification failed: account=%s", account.pk)
                return
            if policy == "compensate":
                await self._compensate(account)
            raise

    async def _compensate(self, account):
        # The welcome failure is what the caller sees, even if the removal fails too.
        try:
            await self.store.remove(Account, account.pk)
        except Exception:
            logger.exception(
                "Could not remove account after welcome notification failed: account=%s",
                account.pk,
            )
            return
        logger.warning(
            "Account removed after welcome notification failed: account=%s",
            account.pk,
        )
