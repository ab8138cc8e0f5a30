import logging
from typing import Optional

from fastapi import APIRouter, Request, Depends
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from paygate.config import CHECKOUT_CORS_HEADERS
from paygate.utils.rate_limit import optional_rate_limit
from paygate.payments import service as payments_service
from paygate.payments import credentials as payments_credentials
from paygate.payments.errors import CheckoutError

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Checkout API"])

CHECKOUT_PATH = "/api/create-checkout-session"


class PublicPaymentConfig(BaseModel):
    stripePublishableKey: Optional[str] = None


# module paygate.payments.views
@router.options(CHECKOUT_PATH, include_in_schema=False)
async def checkout_preflight():
    """
    Preflight CORS: toujours 200, corps vide, quel que soit le body ou les en-têtes.
    """
    return Response(status_code=200, headers=CHECKOUT_CORS_HEADERS)

@router.post(CHECKOUT_PATH, dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_checkout_session(request: Request):
    """
    Crée une session Checkout Stripe one-off et renvoie son identifiant.
    - Entrée JSON: { amount, currency?, name?, success_url, cancel_url }
    - Sécurité: rate limit (10 req / 60s)
    - Étapes:
      1) Valider les paramètres requis (400 sinon, aucun appel externe)
      2) Résoudre la clé secrète (env puis Supabase site_config)
      3) Choisir les moyens de paiement (sonde SEPA si EUR, dégradé vers ["card"])
      4) Créer la session Stripe et renvoyer {sessionId}
    - Erreurs: JSON {"error": ...} via le handler CheckoutError, 500 pour le reste
    """
    try:
        body = await request.json()
    except ValueError:
        # JSON illisible: traité comme des paramètres manquants
        body = None

    try:
        # Appels Stripe/Supabase bloquants: hors de la boucle asyncio
        session = await run_in_threadpool(payments_service.provision_checkout, body)
    except CheckoutError:
        raise
    except Exception as e:
        logger.exception("Error creating checkout session")
        return JSONResponse({"error": str(e)}, status_code=500, headers=CHECKOUT_CORS_HEADERS)
    return JSONResponse({"sessionId": session.id}, headers=CHECKOUT_CORS_HEADERS)

@router.api_route(
    CHECKOUT_PATH,
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def checkout_method_not_allowed():
    return JSONResponse({"error": "Method not allowed"}, status_code=405, headers=CHECKOUT_CORS_HEADERS)

@router.get("/api/payments/config", response_model=PublicPaymentConfig)
def get_public_payment_config() -> PublicPaymentConfig:
    """
    Expose la clé publique Stripe pour initialiser le client (jamais la clé secrète).
    - Résolution: STRIPE_PUBLIC_KEY puis site_config.stripe_publishable_key
    - null si indisponible: le client masque alors le bouton de paiement
    """
    return PublicPaymentConfig(stripePublishableKey=payments_credentials.resolve_publishable_key())
