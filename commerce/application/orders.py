"""
Order Repository

Owns order persistence, the reference from orders to accounts and the
payment gate in front of order creation.

add() runs its steps in a fixed order:

1. Reject a missing or invalid order (InvalidArgument).
2. Confirm the referenced account exists (AccountNotFound).
3. Ask the payment gateway to authorize quantity * price (PaymentDeclined).
4. Insert the order.

Payment is never attempted for an order whose account is missing, and an
order is never stored without a prior authorization. update() and
delete() neither re-run payment nor issue refunds.
"""

import logging
from decimal import Decimal, InvalidOperation

from django.db.models import Q

from commerce.application.support import call_gateway, validate_record
from commerce.domain.exceptions import (
    AccountNotFound,
    InvalidArgument,
    OrderNotFound,
    PaymentDeclined,
)
from commerce.domain.gateways import PaymentGateway
from commerce.infrastructure.gateways import get_payment_gateway
from commerce.infrastructure.store import EntityStore
from commerce.models import Account, Order

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def _require_order(order):
    if order is None:
        raise InvalidArgument("order", "Order is required.")


def _normalise_price(order):
    """
    Express an equivalent price with exactly two decimal places.

    25.99 (float), Decimal("25.990") and 1200.0 become 25.99, 25.99 and
    1200.00. Sub-cent amounts such as 10.005 are left as given so field
    validation rejects them.
    """
    price = order.price
    if price is None or isinstance(price, bool):
        return
    try:
        value = Decimal(str(price))
        cents = value.quantize(CENT)
    except InvalidOperation:
        return
    if cents == value:
        order.price = cents


def _validate(order):
    _normalise_price(order)
    # The account reference is checked against the store, not by field validation.
    validate_record(order, exclude=["account"])
    if order.account_id is None:
        raise InvalidArgument("order", {"account": ["This field cannot be null."]})


class OrderRepository:
    def __init__(self, store: EntityStore | None = None, payments: PaymentGateway | None = None):
        self.store = store if store is not None else EntityStore()
        self.payments = payments if payments is not None else get_payment_gateway()

    async def list_all(self):
        return await self.store.query_all(Order)

    async def get_by_id(self, order_id):
        """Return the order or None when no order has that key."""
        return await self.store.find_by_key(Order, order_id)

    async def get_by_account(self, account_id):
        """
        Return every order placed by an account.

        Raises AccountNotFound rather than returning an empty list when the
        account itself does not exist.
        """
        if not await self.store.any_matching(Account, Q(pk=account_id)):
            raise AccountNotFound(account_id)

        return await self.store.query_where(Order, Q(account_id=account_id))

    async def add(self, order):
        _require_order(order)
        _validate(order)

        if not await self.store.any_matching(Account, Q(pk=order.account_id)):
            raise AccountNotFound(order.account_id)

        if not await self.process_payment(order):
            logger.warning(
                "Payment declined: account=%s amount=%s",
                order.account_id, order.amount,
            )
            raise PaymentDeclined(order.account_id, order.amount)

        order.pk = None
        await self.store.insert(order)

        logger.info("Order created: order=%s account=%s", order.pk, order.account_id)
        return order

    async def update(self, order):
        """Replace the stored order with the incoming one. The account is not re-checked."""
        _require_order(order)
        _validate(order)

        if not await self.store.replace(order):
            raise OrderNotFound(order.pk)

        logger.info("Order updated: order=%s", order.pk)
        return order

    async def delete(self, order_id):
        removed = await self.store.remove(Order, order_id)
        if removed:
            logger.info("Order deleted: order=%s", order_id)
        return removed

    async def exists(self, order_id):
        return await self.store.any_matching(Order, Q(pk=order_id))

    async def process_payment(self, order):
        """Ask the payment gateway for a verdict without storing anything."""
        _require_order(order)
        return await call_gateway("payment", self.payments.authorize(order))
