"""
Accès données pour la feature 'payments': lecture de la ligne unique 'site_config'.
"""
from typing import Any, Dict, Optional
import paygate.infra.supabase_client as supabase_client
from paygate.config import SITE_CONFIG_TABLE


# module paygate.payments.repository
class SiteConfigStore:
    """
    Store distant de configuration (Supabase).
    - get_credential_record(columns): retourne la première ligne de site_config
      restreinte aux colonnes demandées, ou None si la table est vide.
    - Les erreurs de requête sont propagées à l'appelant (pas de retry).
    """

    def __init__(self, url: str, key: str):
        self.url = url
        self.key = key

    def get_credential_record(self, *columns: str) -> Optional[Dict[str, Any]]:
        client = supabase_client.create_store_client(self.url, self.key)
        res = (
            client
            .table(SITE_CONFIG_TABLE)
            .select(",".join(columns) or "*")
            .limit(1)
            .execute()
        )
        rows = getattr(res, "data", None) or []
        return rows[0] if rows else None
