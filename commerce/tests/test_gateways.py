from decimal import Decimal

from django.test import TestCase, override_settings

from commerce.domain.exceptions import InvalidArgument
from commerce.domain.gateways import NotificationGateway, PaymentGateway
from commerce.infrastructure.gateways import (
    LoggingNotificationGateway,
    SimulatedPaymentGateway,
    get_notification_gateway,
    get_payment_gateway,
)
from commerce.models import Order


class RecordingNotificationGateway:
    def __init__(self):
        self.sent = []

    async def send(self, address, subject, body):
        self.sent.append((address, subject, body))


class SimulatedGatewaysTest(TestCase):
    async def test_notification_is_logged(self):
        gateway = LoggingNotificationGateway(latency=0)

        with self.assertLogs("commerce.infrastructure.gateways", level="INFO") as logs:
            await gateway.send("a@x.com", "Welcome", "Welcome A to our platform!")

        self.assertIn("Email sent to a@x.com", logs.output[0])

    async def test_payment_authorizes_positive_order(self):
        gateway = SimulatedPaymentGateway(latency=0)
        order = Order(account_id=1, product="Laptop", quantity=2, price=Decimal("600.00"))

        with self.assertLogs("commerce.infrastructure.gateways", level="INFO") as logs:
            self.assertTrue(await gateway.authorize(order))

        self.assertIn("amount=1200.00", logs.output[0])

    async def test_payment_declines_non_positive_amounts(self):
        gateway = SimulatedPaymentGateway(latency=0)

        self.assertFalse(await gateway.authorize(Order(account_id=1, product="X", quantity=0, price=Decimal("5.00"))))
        self.assertFalse(await gateway.authorize(Order(account_id=1, product="X", quantity=1, price=Decimal("0"))))

    async def test_payment_rejects_missing_order(self):
        with self.assertRaises(InvalidArgument):
            await SimulatedPaymentGateway(latency=0).authorize(None)

    @override_settings(COMMERCE={"SIMULATED_LATENCY": 0.25})
    def test_latency_defaults_to_setting(self):
        self.assertEqual(LoggingNotificationGateway().latency, 0.25)
        self.assertEqual(SimulatedPaymentGateway().latency, 0.25)


class GatewayLoaderTest(TestCase):
    def test_defaults(self):
        self.assertIsInstance(get_notification_gateway(), LoggingNotificationGateway)
        self.assertIsInstance(get_payment_gateway(), SimulatedPaymentGateway)

    @override_settings(
        COMMERCE={"NOTIFICATION_GATEWAY": "commerce.tests.test_gateways.RecordingNotificationGateway"}
    )
    def test_notification_gateway_from_settings(self):
        self.assertIsInstance(get_notification_gateway(), RecordingNotificationGateway)

    def test_defaults_satisfy_gateway_contracts(self):
        self.assertIsInstance(LoggingNotificationGateway(latency=0), NotificationGateway)
        self.assertIsInstance(SimulatedPaymentGateway(latency=0), PaymentGateway)
        self.assertNotIsInstance(SimulatedPaymentGateway(latency=0), NotificationGateway)
