"""
Sélection des moyens de paiement proposés sur la session.
- "card" est universel et toujours en tête.
- Pour EUR, on sonde les capacités du compte et on ajoute "sepa_debit" si actif.
- Sonde en échec = mode dégradé: on garde ["card"] (le paiement ne doit jamais être bloqué).
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

CARD_CHANNEL = "card"
REGION_CURRENCY = "eur"
REGION_CHANNEL = "sepa_debit"
REGION_CAPABILITY = "sepa_debit_payments"


class CapabilityProbe(Protocol):
    def get_capabilities(self) -> Dict[str, Any]:
        ...


@dataclass
class ProbeOutcome:
    """
    Résultat explicite de la sélection:
    - channels: liste ordonnée des canaux retenus
    - probed: True si la sonde de capacités a été appelée
    - degraded: True si la sonde a échoué (canaux par défaut)
    - reason: message de l'échec en mode dégradé
    """
    channels: List[str] = field(default_factory=lambda: [CARD_CHANNEL])
    probed: bool = False
    degraded: bool = False
    reason: Optional[str] = None


# module paygate.payments.channels
class ChannelSelector:
    def __init__(self, probe: CapabilityProbe):
        self.probe = probe

    def select(self, currency: str) -> ProbeOutcome:
        outcome = ProbeOutcome()
        if (currency or "").lower() != REGION_CURRENCY:
            return outcome

        outcome.probed = True
        try:
            capabilities = self.probe.get_capabilities() or {}
        except Exception as e:
            logger.warning("Error checking account capabilities: %s", e)
            outcome.degraded = True
            outcome.reason = str(e)
            return outcome

        if capabilities.get(REGION_CAPABILITY) == "active":
            outcome.channels.append(REGION_CHANNEL)
        return outcome
