"""
Settings for the commerce app.

Projects override any of these through a single COMMERCE dict in their
Django settings. Values are read on every access so override_settings
takes effect immediately.
"""

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DEFAULTS = {
    "NOTIFICATION_GATEWAY": "commerce.infrastructure.gateways.LoggingNotificationGateway",
    "PAYMENT_GATEWAY": "commerce.infrastructure.gateways.SimulatedPaymentGateway",
    # Seconds allowed for a single gateway call. None waits indefinitely.
    "GATEWAY_TIMEOUT": None,
    "SIMULATED_LATENCY": 0.1,
    "WELCOME_NOTIFICATION_FAILURE": "propagate",
}

WELCOME_NOTIFICATION_POLICIES = ("propagate", "suppress", "compensate")


def commerce_setting(name):
    if name not in DEFAULTS:
        raise AttributeError(f"Unknown commerce setting: {name}")
    overrides = getattr(settings, "COMMERCE", None) or {}
    return overrides.get(name, DEFAULTS[name])


def welcome_notification_policy():
    policy = commerce_setting("WELCOME_NOTIFICATION_FAILURE")
    if policy not in WELCOME_NOTIFICATION_POLICIES:
        raise ImproperlyConfigured(
            f"COMMERCE['WELCOME_NOTIFICATION_FAILURE'] must be one of "
            f"{', '.join(WELCOME_NOTIFICATION_POLICIES)}; got {policy!r}."
        )
    return policy
