"""
Déclenchement d'un achat côté client: demande une session au serveur puis redirige.

États: IDLE -> REQUESTING -> {REDIRECTING | FAILED}
- Le drapeau busy empêche un double déclenchement depuis le même contrôle.
- Il reste indicatif: deux orchestrateurs (onglets, boutons) peuvent lancer deux achats.
- Aucun retry automatique en cas d'échec.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from paygate.config import BASE_URL
from .redirect import StripeCheckoutRedirector

logger = logging.getLogger(__name__)

PRODUCT_NAME = "Video Access"
CURRENCY = "usd"
# Placeholder remplacé par Stripe au retour sur success_url
SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


class PurchaseState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    REDIRECTING = "redirecting"
    FAILED = "failed"


class PurchaseInProgressError(RuntimeError):
    """Déclenchement refusé: un achat est déjà en cours sur ce contrôle."""


class CheckoutRequestError(Exception):
    def __init__(self, status_code: int, error: Optional[str]):
        super().__init__(f"Checkout request failed ({status_code}): {error}")
        self.status_code = status_code
        self.error = error


@dataclass(frozen=True)
class MediaItem:
    id: str
    price: float


async def load_publishable_key(config_url: str, http: Optional[httpx.AsyncClient] = None) -> Optional[str]:
    """
    Lit la clé publique exposée par GET /api/payments/config.
    Retourne None si le serveur n'en a pas (le paiement n'est alors pas proposé).
    """
    if http is None:
        async with httpx.AsyncClient() as client:
            resp = await client.get(config_url)
    else:
        resp = await http.get(config_url)
    resp.raise_for_status()
    return (resp.json() or {}).get("stripePublishableKey")


class PurchaseOrchestrator:
    def __init__(
        self,
        endpoint: str,
        publishable_key: Optional[str],
        redirector: Optional[StripeCheckoutRedirector] = None,
        http: Optional[httpx.AsyncClient] = None,
        origin: str = BASE_URL,
    ):
        self.endpoint = endpoint
        self.publishable_key = publishable_key
        self.redirector = redirector or StripeCheckoutRedirector()
        self.http = http
        self.origin = origin.rstrip("/")
        self.state = PurchaseState.IDLE
        self.busy = False
        self.last_error: Optional[Exception] = None

    def success_url(self, item: MediaItem) -> str:
        return f"{self.origin}/video/{quote(str(item.id))}?payment_success=true&session_id={SESSION_ID_PLACEHOLDER}"

    def cancel_url(self, item: MediaItem) -> str:
        return f"{self.origin}/video/{quote(str(item.id))}?payment_canceled=true"

    def build_payload(self, item: MediaItem) -> Dict[str, Any]:
        return {
            "amount": item.price,
            "currency": CURRENCY,
            "name": PRODUCT_NAME,
            "success_url": self.success_url(item),
            "cancel_url": self.cancel_url(item),
        }

    async def purchase(self, item: MediaItem) -> PurchaseState:
        """
        Action explicite de l'acheteur.
        - Sans clé publique: no-op (le bouton de paiement n'est pas proposé)
        - busy déjà levé: PurchaseInProgressError, aucun appel HTTP
        - Succès: REDIRECTING (busy reste levé, la navigation quitte la page)
        - Échec: FAILED, busy retombé, erreur conservée dans last_error
        """
        if not self.publishable_key:
            return self.state
        if self.busy:
            raise PurchaseInProgressError("A purchase is already in progress")

        self.busy = True
        self.state = PurchaseState.REQUESTING
        self.last_error = None
        try:
            self.redirector.init(self.publishable_key)
            session_id = await self._create_checkout_session(item)
            self.state = PurchaseState.REDIRECTING
            self.redirector.redirect_to_checkout(session_id)
        except Exception as e:
            logger.exception("Stripe payment error item_id=%s", item.id)
            self.state = PurchaseState.FAILED
            self.last_error = e
            self.busy = False
        return self.state

    async def _create_checkout_session(self, item: MediaItem) -> str:
        payload = self.build_payload(item)
        if self.http is None:
            async with httpx.AsyncClient() as client:
                resp = await client.post(self.endpoint, json=payload)
        else:
            resp = await self.http.post(self.endpoint, json=payload)

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        session_id = data.get("sessionId")
        if resp.status_code != 200 or not session_id:
            raise CheckoutRequestError(resp.status_code, data.get("error"))
        return str(session_id)
