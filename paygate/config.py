# paygate.config
from pathlib import Path
import os
from typing import Dict
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale du service de paiement.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose les réglages statiques (CORS/hosts, cookies, URL de base)
- Les secrets Stripe/Supabase ne sont PAS figés à l'import: load_payment_env()
  les relit à chaque appel (aucun cache entre deux requêtes)
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _first_env(*names: str) -> str:
    # Premier nom défini et non vide, nettoyé
    for name in names:
        value = _clean_env(os.getenv(name) or "")
        if value:
            return value
    return ""

def _normalize_url(url: str) -> str:
    # SUPABASE_URL peut parfois être sans schéma: on préfixe en https://
    if url and not url.startswith("http"):
        url = "https://" + url
    return url.rstrip("/")

# Cookies / Sécurité
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")

# CORS (dev)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()]

BASE_URL = _clean_env(os.getenv("BASE_URL") or "http://localhost:8000")

# Page hébergée Stripe vers laquelle le client redirige (session_id ajouté en suffixe)
STRIPE_CHECKOUT_BASE_URL = _clean_env(os.getenv("STRIPE_CHECKOUT_BASE_URL") or "https://checkout.stripe.com/pay")

# Table et colonnes de la configuration distante (une seule ligne)
SITE_CONFIG_TABLE = "site_config"
SECRET_KEY_COLUMN = "stripe_secret_key"
PUBLISHABLE_KEY_COLUMN = "stripe_publishable_key"

def load_payment_env() -> Dict[str, str]:
    """
    Relit les variables Stripe/Supabase au moment de la requête.
    - stripe_secret_key: clé secrète locale (prioritaire)
    - supabase_url / supabase_key: accès au store distant (fallback)
    - stripe_publishable_key: clé publique destinée au client
    Toutes les valeurs sont des chaînes ("" si absentes).
    """
    return {
        "stripe_secret_key": _first_env("STRIPE_SECRET_KEY"),
        "stripe_publishable_key": _first_env("STRIPE_PUBLIC_KEY", "STRIPE_PUBLISHABLE_KEY"),
        "supabase_url": _normalize_url(
            _first_env("SUPABASE_URL", "VITE_SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL")
        ),
        "supabase_key": _first_env(
            "SUPABASE_SERVICE_KEY",
            "SUPABASE_SERVICE_ROLE",
            "SUPABASE_ANON_KEY",
            "VITE_SUPABASE_ANON_KEY",
        ),
    }

# En-têtes CORS permissifs de l'endpoint checkout (appelé depuis n'importe quel front)
CHECKOUT_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
