"""
Default gateway implementations and the settings-driven loader.

The defaults stand in for real providers: they wait a configurable
latency and log what a provider would have done. Deployments point
COMMERCE["NOTIFICATION_GATEWAY"] and COMMERCE["PAYMENT_GATEWAY"] at their
own classes implementing the contracts in commerce.domain.gateways.
"""

import asyncio
import logging

from django.utils.module_loading import import_string

from commerce.conf import commerce_setting
from commerce.domain.exceptions import InvalidArgument

logger = logging.getLogger(__name__)


class LoggingNotificationGateway:
    """Logs each message instead of delivering it."""

    def __init__(self, latency=None):
        self.latency = commerce_setting("SIMULATED_LATENCY") if latency is None else latency

    async def send(self, address, subject, body):
        await asyncio.sleep(self.latency)
        logger.info("Email sent to %s, subject=%r, body=%r", address, subject, body)


class SimulatedPaymentGateway:
    """Authorizes any order with a positive price and quantity."""

    def __init__(self, latency=None):
        self.latency = commerce_setting("SIMULATED_LATENCY") if latency is None else latency

    async def authorize(self, order):
        if order is None:
            raise InvalidArgument("order", "Order is required.")

        await asyncio.sleep(self.latency)

        if order.price <= 0 or order.quantity <= 0:
            logger.warning(
                "Payment declined: account=%s price=%s quantity=%s",
                order.account_id, order.price, order.quantity,
            )
            return False

        logger.info("Payment processed: account=%s amount=%s", order.account_id, order.amount)
        return True


def get_notification_gateway():
    return import_string(commerce_setting("NOTIFICATION_GATEWAY"))()


def get_payment_gateway():
    return import_string(commerce_setting("PAYMENT_GATEWAY"))()
