"""
Cas d'usage 'payments': orchestre validation, credentials, canaux et Stripe.
"""
import logging
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, List, Optional

import stripe

from . import labels as labels_mod
from .channels import ChannelSelector
from .credentials import secret_key_resolver
from .errors import ValidationError, UpstreamError
from .repository import SiteConfigStore
from .stripe_client import StripeGateway

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "usd"
SESSION_MODE = "payment"


@dataclass(frozen=True)
class CheckoutRequest:
    amount: Any
    success_url: Any
    cancel_url: Any
    currency: str = DEFAULT_CURRENCY
    name: Optional[str] = None

    @classmethod
    def from_payload(cls, body: Any) -> "CheckoutRequest":
        """
        Construit la requête depuis le JSON brut (sans valider).
        - Body non-objet: traité comme vide (la validation échouera)
        - currency: minuscule, "usd" si absente ou vide
        """
        data: Dict[str, Any] = body if isinstance(body, dict) else {}
        currency = data.get("currency") or DEFAULT_CURRENCY
        return cls(
            amount=data.get("amount"),
            success_url=data.get("success_url"),
            cancel_url=data.get("cancel_url"),
            currency=str(currency).strip().lower() or DEFAULT_CURRENCY,
            name=data.get("name"),
        )

    def validate(self) -> None:
        """
        Vérifie amount (>0), success_url et cancel_url (chaînes non vides).
        Soulève ValidationError("Missing required parameters") sinon.
        """
        if not _is_positive_number(self.amount):
            raise ValidationError()
        for url in (self.success_url, self.cancel_url):
            if not isinstance(url, str) or not url.strip():
                raise ValidationError()


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: Optional[str] = None


def _is_positive_number(value: Any) -> bool:
    # bool est un int en Python: on l'exclut explicitement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0

def to_minor_units(amount: float) -> int:
    """
    Arrondi à l'unité mineure la plus proche, demi vers le haut (1999.5 -> 2000).
    """
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def build_line_item(request: CheckoutRequest, label: str) -> Dict[str, Any]:
    """
    Ligne Stripe unique: price_data (devise, montant arrondi, libellé) et quantité 1.
    """
    return {
        "price_data": {
            "currency": request.currency,
            "product_data": {"name": label},
            "unit_amount": to_minor_units(request.amount),
        },
        "quantity": 1,
    }

def _stripe_message(e: Exception) -> str:
    return getattr(e, "user_message", None) or str(e)


# module paygate.payments.service
class SessionProvisioner:
    """
    Crée une session Checkout one-off.
    - Pas de clé d'idempotence: chaque appel réussi crée une session distincte.
    - label_picker injectable pour des tests déterministes.
    """

    def __init__(
        self,
        gateway_factory: Optional[Callable[[str], StripeGateway]] = None,
        label_picker: Optional[labels_mod.LabelPicker] = None,
        catalog=labels_mod.PRODUCT_LABELS,
    ):
        self.gateway_factory = gateway_factory or StripeGateway
        self.label_picker = label_picker or labels_mod.RandomLabelPicker()
        self.catalog = catalog

    def create(self, request: CheckoutRequest, credential: str, channels: List[str]) -> CheckoutSession:
        request.validate()
        label = self.label_picker.pick(self.catalog)
        gateway = self.gateway_factory(credential)
        try:
            session = gateway.create_session(
                payment_method_types=list(channels),
                line_items=[build_line_item(request, label)],
                mode=SESSION_MODE,
                success_url=request.success_url,
                cancel_url=request.cancel_url,
            )
        except stripe.StripeError as e:
            logger.error("Error creating checkout session: %s", e)
            raise UpstreamError(_stripe_message(e))

        session_id = (session or {}).get("id")
        if not session_id:
            raise UpstreamError("Stripe returned a session without id")
        return CheckoutSession(id=str(session_id), url=(session or {}).get("url"))


def provision_checkout(
    body: Any,
    *,
    env: Optional[Dict[str, str]] = None,
    store_factory: Optional[Callable[[str, str], SiteConfigStore]] = None,
    gateway_factory: Optional[Callable[[str], StripeGateway]] = None,
    label_picker: Optional[labels_mod.LabelPicker] = None,
) -> CheckoutSession:
    """
    Provisioning complet pour une requête HTTP:
      1) Valider le payload (aucun appel externe en cas d'erreur)
      2) Résoudre la clé secrète (env puis Supabase)
      3) Sélectionner les canaux (sonde de capacités si EUR)
      4) Créer la session Stripe
    Erreurs: ValidationError (400), ConfigurationError/UpstreamError (500).
    """
    request = CheckoutRequest.from_payload(body)
    request.validate()

    credential = secret_key_resolver(env, store_factory=store_factory).resolve()
    gateway = (gateway_factory or StripeGateway)(credential)

    outcome = ChannelSelector(gateway).select(request.currency)
    logger.info("Payment methods for %s: %s", request.currency.upper(), outcome.channels)

    provisioner = SessionProvisioner(
        gateway_factory=lambda _key: gateway,
        label_picker=label_picker,
    )
    session = provisioner.create(request, credential, outcome.channels)
    logger.info("Checkout session created id=%s", session.id)
    return session
