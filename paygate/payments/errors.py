"""
Erreurs métier du provisioning Checkout.
Chaque erreur connaît son code HTTP et son payload JSON ({"error": ..., "details": ...}),
le rendu est fait par le handler enregistré dans paygate.app_setup.exceptions.
"""
from typing import Any, Dict, Optional

# Messages exposés au client (champ "error" stable)
MISSING_PARAMETERS = "Missing required parameters"
SECRET_KEY_NOT_CONFIGURED = "Stripe secret key not configured"
STORE_NOT_CONFIGURED = "Supabase not configured on server"
STORE_QUERY_FAILED = "Failed to fetch Stripe credentials from Supabase"


class CheckoutError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ConfigurationError(CheckoutError):
    """Clé Stripe introuvable, ou store Supabase absent/inaccessible."""
    status_code = 500


class ValidationError(CheckoutError):
    """Paramètre requis manquant: aucun appel externe n'a eu lieu."""
    status_code = 400

    def __init__(self, message: str = MISSING_PARAMETERS, details: Optional[str] = None):
        super().__init__(message, details)


class UpstreamError(CheckoutError):
    """Stripe a refusé ou échoué la création de session (message transmis tel quel)."""
    status_code = 500
