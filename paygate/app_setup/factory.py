"""
Factory d'application recommandée pour les entrypoints (ex: paygate.asgi).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from typing import List, Optional

from fastapi import FastAPI
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware, register_force_https_middleware
from .exceptions import register_exception_handlers
from .routers import register_routers

def create_app(cors_origins: Optional[List[str]] = None) -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - middlewares de base (CORS, TrustedHost, ProxyHeaders) et en-têtes de sécurité
      - gestionnaires d'exceptions
      - tous les routers (checkout, health)
      - redirection HTTPS en dernier, pour s'exécuter en premier
    Paramètres:
      cors_origins: origines CORS hors checkout (par défaut CORS_ORIGINS)
    Retour:
      FastAPI prêt à être utilisé par le serveur ASGI.
    """
    app = FastAPI(title="Paygate Checkout API", lifespan=lifespan)
    register_basic_middlewares(app, cors_origins)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    register_force_https_middleware(app)
    return app
