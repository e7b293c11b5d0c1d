"""
Persistence Models — Commerce Domain (Django ORM)

This module defines the two entity shapes the repositories coordinate:
accounts and the orders they own.

Key decisions:

- Account.email is UNIQUE at the database level. The account repository
  relies on the resulting IntegrityError as its duplicate-email signal
  instead of scanning existing accounts before writing.
- Order references its account through a foreign key with no database
  constraint and DO_NOTHING on delete. Deleting an account leaves its
  orders in place, and updating an order does not re-check the account.
- Field limits are declared here and enforced by the repositories through
  full_clean() before any write. Quantity and price are additionally
  guarded by CHECK constraints.

The ORM models double as the domain entities. Repositories accept and
return these instances.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q


class Account(models.Model):
    """An account holder, identified by a store-assigned key and a unique email."""

    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)

    # Unique constraint enforces email uniqueness at the persistence layer.
    email = models.EmailField(max_length=100, unique=True)

    def __str__(self):
        return f"Account {self.id} - {self.email}"


class Order(models.Model):
    """
    A purchase placed by an account.

    Orders are only ever created after the payment gateway has authorized
    quantity * price. The account reference is checked at creation time
    only.
    """

    account = models.ForeignKey(
        Account,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="orders",
    )

    product = models.CharField(max_length=100)

    quantity = models.IntegerField(validators=[MinValueValidator(1)])

    price = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    class Meta:
        constraints = [
            models.CheckConstraint(condition=Q(quantity__gte=1), name="order_quantity_positive"),
            models.CheckConstraint(condition=Q(price__gt=0), name="order_price_positive"),
        ]

    @property
    def amount(self):
        """Total charged for the order."""
        return self.quantity * self.price

    def __str__(self):
        return f"Order {self.id} - {self.product} x{self.quantity}"
