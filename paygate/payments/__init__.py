"""
Module 'payments' (feature-first): point d'entrée public.
Réunit résolution des clés, sélection des canaux, libellés, client Stripe et provisioning.
"""

from .errors import CheckoutError, ConfigurationError, ValidationError, UpstreamError
from .credentials import (
    CredentialResolver,
    EnvCredentialProvider,
    StoreCredentialProvider,
    secret_key_resolver,
    resolve_publishable_key,
)
from .channels import ChannelSelector, ProbeOutcome
from .labels import PRODUCT_LABELS, RandomLabelPicker, FixedLabelPicker
from .stripe_client import StripeGateway
from .repository import SiteConfigStore
from .service import (
    CheckoutRequest,
    CheckoutSession,
    SessionProvisioner,
    build_line_item,
    to_minor_units,
    provision_checkout,
)

__all__ = [
    # errors
    "CheckoutError",
    "ConfigurationError",
    "ValidationError",
    "UpstreamError",
    # credentials
    "CredentialResolver",
    "EnvCredentialProvider",
    "StoreCredentialProvider",
    "secret_key_resolver",
    "resolve_publishable_key",
    # channels
    "ChannelSelector",
    "ProbeOutcome",
    # labels
    "PRODUCT_LABELS",
    "RandomLabelPicker",
    "FixedLabelPicker",
    # stripe / store
    "StripeGateway",
    "SiteConfigStore",
    # services
    "CheckoutRequest",
    "CheckoutSession",
    "SessionProvisioner",
    "build_line_item",
    "to_minor_units",
    "provision_checkout",
]
