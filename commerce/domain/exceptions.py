"""
Error taxonomy shared by the account and order repositories.

Four kinds of failure are distinguished and never conflated:

- InvalidArgument: a required input is absent or structurally invalid.
- NotFound: an operation referenced an account or order key that does not exist.
- Conflict: a business rule rejected the operation (duplicate email, declined payment).
- GatewayFailure: the notification or payment gateway itself failed to complete.

A delete or exists call on a missing key returns False. It does not raise.
"""


class RepositoryError(Exception):
    """Base class for every failure raised by the repositories."""


class InvalidArgument(RepositoryError):
    """Raised when a required input is missing or fails field validation."""

    def __init__(self, argument, reason):
        self.argument = argument
        self.reason = reason
        super().__init__(f"Invalid {argument}: {reason}")


class NotFound(RepositoryError):
    """Raised when a referenced key does not resolve to a stored record."""

    entity = "Record"

    def __init__(self, key):
        self.key = key
        super().__init__(f"{self.entity} with ID {key} not found.")


class AccountNotFound(NotFound):
    entity = "Account"


class OrderNotFound(NotFound):
    entity = "Order"


class Conflict(RepositoryError):
    """Raised when a business rule rejects an otherwise well-formed request."""


class EmailAlreadyInUse(Conflict):
    """Raised when an account would share its email address with another account."""

    def __init__(self, email):
        self.email = email
        super().__init__(f"Email {email} is already in use.")


class PaymentDeclined(Conflict):
    """Raised when the payment gateway declines an order. The order is not stored."""

    def __init__(self, account_id, amount):
        self.account_id = account_id
        self.amount = amount
        super().__init__("Payment processing failed.")


class GatewayFailure(RepositoryError):
    """Raised when an external gateway errors or times out instead of answering."""

    def __init__(self, gateway, reason):
        self.gateway = gateway
        self.reason = reason
        super().__init__(f"{gateway} gateway failed: {reason}")
