"""
Redirection vers la page Checkout hébergée par Stripe (côté client).
Initialisée avec la clé publique, jamais avec la clé secrète serveur.
"""
import logging
import webbrowser
from typing import Any, Callable, Optional

from paygate.config import STRIPE_CHECKOUT_BASE_URL

logger = logging.getLogger(__name__)


class StripeCheckoutRedirector:
    """
    - init(publishable_key): prépare le client (clé "pk_..." attendue)
    - redirect_to_checkout(session_id): navigation complète vers la page hébergée
    Le navigateur est injectable (webbrowser.open par défaut).
    """

    def __init__(self, navigate: Callable[[str], Any] = webbrowser.open, base_url: str = STRIPE_CHECKOUT_BASE_URL):
        self.navigate = navigate
        self.base_url = base_url.rstrip("/")
        self.publishable_key: Optional[str] = None

    def init(self, publishable_key: str) -> None:
        key = (publishable_key or "").strip()
        if not key.startswith("pk_"):
            raise ValueError("Invalid Stripe publishable key")
        self.publishable_key = key

    def checkout_url(self, session_id: str) -> str:
        return f"{self.base_url}/{session_id}"

    def redirect_to_checkout(self, session_id: str) -> str:
        if not self.publishable_key:
            raise RuntimeError("Stripe client not initialized")
        if not session_id:
            raise ValueError("session_id is required")
        url = self.checkout_url(session_id)
        logger.info("Redirecting to Stripe Checkout session_id=%s", session_id)
        self.navigate(url)
        return url
