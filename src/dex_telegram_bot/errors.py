from __future__ import annotations


class InvalidOrderData(ValueError):
    """An order event carries fields that cannot be formatted."""


class SubscriptionError(RuntimeError):
    """The order feed subscription failed (connection lost, handshake refused, ...)."""


class DeliveryError(RuntimeError):
    """The chat transport rejected a message."""
