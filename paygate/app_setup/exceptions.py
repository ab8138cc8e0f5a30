"""
Gestionnaires d'exceptions.
- CheckoutError -> JSON {"error": ..., "details"?} avec le code porté par l'erreur
  et les en-têtes CORS de l'endpoint checkout.
- HTTPException -> JSON {"error": detail} (ex: 429 du rate limiter, 404 Starlette);
  sur l'endpoint checkout, en-têtes CORS ajoutés et 405 normalisé.
"""
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse
from paygate.config import CHECKOUT_CORS_HEADERS
from paygate.payments.errors import CheckoutError
from paygate.payments.views import CHECKOUT_PATH

METHOD_NOT_ALLOWED = "Method not allowed"

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers: chaque chemin d'échec produit un payload avec un champ "error" stable.
    """
    @app.exception_handler(CheckoutError)
    async def checkout_error_to_json(request: Request, exc: CheckoutError):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_payload(),
            headers=CHECKOUT_CORS_HEADERS,
        )

    @app.exception_handler(HTTPException)
    async def http_error_to_json(request: Request, exc: HTTPException):
        headers = dict(getattr(exc, "headers", None) or {})
        detail = exc.detail
        if request.url.path == CHECKOUT_PATH:
            headers.update(CHECKOUT_CORS_HEADERS)
            if exc.status_code == 405:
                detail = METHOD_NOT_ALLOWED
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": detail},
            headers=headers or None,
        )
