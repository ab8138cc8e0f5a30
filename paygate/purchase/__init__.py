"""
Module 'purchase': déclenchement d'achat côté client (session serveur puis redirection Stripe).
"""

from .orchestrator import (
    MediaItem,
    PurchaseOrchestrator,
    PurchaseState,
    PurchaseInProgressError,
    CheckoutRequestError,
    load_publishable_key,
)
from .redirect import StripeCheckoutRedirector

__all__ = [
    "MediaItem",
    "PurchaseOrchestrator",
    "PurchaseState",
    "PurchaseInProgressError",
    "CheckoutRequestError",
    "load_publishable_key",
    "StripeCheckoutRedirector",
]
