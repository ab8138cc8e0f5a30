"""
Adaptateur Stripe: centralise les appels au SDK.
La clé secrète est passée à chaque appel (api_key=...) au lieu de stripe.api_key,
aucun état global n'est partagé entre deux requêtes.
"""
import stripe
from typing import Any, Dict, List, Optional


def _to_plain_dict(obj: Optional[Any]) -> Dict[str, Any]:
    # StripeObject n'est pas un Mapping: conversion via to_dict()
    if obj is None:
        return {}
    if isinstance(obj, dict):
        return dict(obj)
    return obj.to_dict()

# module paygate.payments.stripe_client
class StripeGateway:
    """
    Capacités utilisées par le provisioning:
    - create_session(...): crée une session Checkout one-off, retourne un dict (id, url, ...)
    - get_capabilities(): capacités du compte marchand (ex: {"card_payments": "active"})
    """

    def __init__(self, api_key: str):
        self.api_key = api_key

    def create_session(
        self,
        *,
        payment_method_types: List[str],
        line_items: List[Dict[str, Any]],
        mode: str,
        success_url: str,
        cancel_url: str,
    ) -> Dict[str, Any]:
        """
        Crée une session Stripe Checkout.
        - payment_method_types: canaux proposés (ex: ["card", "sepa_debit"])
        - line_items: lignes Stripe (price_data/quantity)
        - mode: "payment" (non récurrent)
        Retour: dict session (ex: {"id": "cs_test_...", "url": "https://..."})
        """
        session = stripe.checkout.Session.create(
            api_key=self.api_key,
            payment_method_types=payment_method_types,
            line_items=line_items,
            mode=mode,
            success_url=success_url,
            cancel_url=cancel_url,
        )
        return _to_plain_dict(session)

    def get_capabilities(self) -> Dict[str, Any]:
        """
        Récupère le compte courant (GET /v1/account) et retourne ses capabilities.
        """
        account = stripe.Account.retrieve(api_key=self.api_key)
        return _to_plain_dict(getattr(account, "capabilities", None))
