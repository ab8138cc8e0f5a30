"""
Résolution des clés Stripe à partir d'une chaîne ordonnée de sources.

- Source 1: variable d'environnement (STRIPE_SECRET_KEY / STRIPE_PUBLIC_KEY)
- Source 2: ligne unique de la table Supabase 'site_config'
La première source qui renvoie une valeur gagne; pas de retry d'une source à l'autre,
pas de cache: chaque requête refait la résolution.
"""
import logging
from typing import Callable, Dict, Iterable, List, Optional, Protocol

from paygate.config import load_payment_env, SECRET_KEY_COLUMN, PUBLISHABLE_KEY_COLUMN
from .errors import (
    ConfigurationError,
    SECRET_KEY_NOT_CONFIGURED,
    STORE_NOT_CONFIGURED,
    STORE_QUERY_FAILED,
)
from .repository import SiteConfigStore

logger = logging.getLogger(__name__)

# module paygate.payments.credentials
class CredentialProvider(Protocol):
    name: str

    def attempt(self) -> Optional[str]:
        """Retourne la valeur, None si la source est vide, ou lève ConfigurationError."""
        ...


class EnvCredentialProvider:
    name = "env"

    def __init__(self, value: Optional[str]):
        self.value = value

    def attempt(self) -> Optional[str]:
        return (self.value or "").strip() or None


class StoreCredentialProvider:
    """
    Lit une colonne de site_config via Supabase.
    - Accès absents (url/key) -> ConfigurationError("Supabase not configured on server")
    - Échec de requête -> ConfigurationError(..., details=<message sous-jacent>)
    - Colonne vide ou ligne absente -> None (la chaîne continue puis échoue)
    """
    name = "supabase"

    def __init__(
        self,
        url: str,
        key: str,
        column: str,
        store_factory: Optional[Callable[[str, str], SiteConfigStore]] = None,
    ):
        self.url = url
        self.key = key
        self.column = column
        self.store_factory = store_factory or SiteConfigStore

    def attempt(self) -> Optional[str]:
        if not self.url or not self.key:
            raise ConfigurationError(STORE_NOT_CONFIGURED)
        try:
            record = self.store_factory(self.url, self.key).get_credential_record(self.column)
        except Exception as e:
            logger.error("Error fetching %s from Supabase: %s", self.column, e)
            raise ConfigurationError(STORE_QUERY_FAILED, details=_error_message(e))
        value = (record or {}).get(self.column) or ""
        return str(value).strip() or None


class CredentialResolver:
    def __init__(self, providers: Iterable[CredentialProvider], missing_message: str = SECRET_KEY_NOT_CONFIGURED):
        self.providers: List[CredentialProvider] = list(providers)
        self.missing_message = missing_message

    def resolve(self) -> str:
        for provider in self.providers:
            value = provider.attempt()
            if value:
                logger.info("Stripe credential resolved from %s", provider.name)
                return value
        raise ConfigurationError(self.missing_message)


def _error_message(e: Exception) -> str:
    # postgrest.APIError expose .message; sinon repr standard
    return str(getattr(e, "message", None) or e)

def secret_key_resolver(
    env: Optional[Dict[str, str]] = None,
    store_factory: Optional[Callable[[str, str], SiteConfigStore]] = None,
) -> CredentialResolver:
    """
    Chaîne pour la clé secrète serveur: env STRIPE_SECRET_KEY puis site_config.stripe_secret_key.
    """
    env = env if env is not None else load_payment_env()
    return CredentialResolver([
        EnvCredentialProvider(env.get("stripe_secret_key")),
        StoreCredentialProvider(
            env.get("supabase_url", ""),
            env.get("supabase_key", ""),
            SECRET_KEY_COLUMN,
            store_factory=store_factory,
        ),
    ])

def resolve_publishable_key(
    env: Optional[Dict[str, str]] = None,
    store_factory: Optional[Callable[[str, str], SiteConfigStore]] = None,
) -> Optional[str]:
    """
    Clé publique pour le client (jamais la clé secrète).
    - Même ordre de sources que la clé secrète.
    - Tolérant: toute ConfigurationError est loggée et renvoie None (le client masque alors le paiement).
    """
    env = env if env is not None else load_payment_env()
    resolver = CredentialResolver([
        EnvCredentialProvider(env.get("stripe_publishable_key")),
        StoreCredentialProvider(
            env.get("supabase_url", ""),
            env.get("supabase_key", ""),
            PUBLISHABLE_KEY_COLUMN,
            store_factory=store_factory,
        ),
    ], missing_message="Stripe publishable key not configured")
    try:
        return resolver.resolve()
    except ConfigurationError as e:
        logger.warning("Publishable key unavailable: %s", e.message)
        return None
