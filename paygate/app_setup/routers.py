"""
Registre central des routers (checkout API, health).
"""
from fastapi import FastAPI
from paygate.payments import views as payments_views
from paygate.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    """
    Agrège tous les routers de l'application.
    - L'ordre n'a pas d'impact sauf conflits de chemins.
    """
    # API checkout
    app.include_router(payments_views.router)
    # Health & monitoring
    app.include_router(health_router)
