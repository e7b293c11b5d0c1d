"""Contracts for the external services the repositories call out to."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class NotificationGateway(Protocol):
    """Delivers a message to an address. Failure is signalled by raising."""

    async def send(self, address: str, subject: str, body: str) -> None:
        ...


@runtime_checkable
class PaymentGateway(Protocol):
    """
    Authorizes or rejects the full amount (quantity * price) of an order.

    A declined charge is a False verdict, not an exception. Only contract
    violations such as a missing order may raise.
    """

    async def authorize(self, order) -> bool:
        ...
