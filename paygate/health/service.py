"""
Diagnostics de configuration (sans jamais exposer les valeurs secrètes).
"""
from typing import Any, Dict
from fastapi import Request
from paygate.config import load_payment_env
from paygate.utils.rate_limit import rate_limit_health_info

def health_config_info(request: Request) -> Dict[str, Any]:
    """
    Indique quelles sources de clés sont configurées:
    - stripe_secret_env: STRIPE_SECRET_KEY présente
    - stripe_publishable_env: clé publique présente
    - supabase_store: URL + clé d'accès Supabase présentes (fallback)
    Ajoute l'état du rate limiting.
    """
    env = load_payment_env()
    return {
        "stripe_secret_env": bool(env["stripe_secret_key"]),
        "stripe_publishable_env": bool(env["stripe_publishable_key"]),
        "supabase_store": bool(env["supabase_url"] and env["supabase_key"]),
        "rate_limit": rate_limit_health_info(request),
    }
