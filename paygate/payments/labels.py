"""
Libellés produit affichés sur le relevé de l'acheteur.
Le libellé est tiré au hasard dans un catalogue fermé, indépendamment de l'article acheté.
"""
import random
from typing import Optional, Protocol, Sequence

PRODUCT_LABELS = (
    "Personal Development Ebook",
    "Financial Freedom Ebook",
    "Digital Marketing Guide",
    "Health & Wellness Ebook",
    "Productivity Masterclass",
    "Mindfulness & Meditation Guide",
    "Entrepreneurship Blueprint",
    "Wellness Program",
    "Success Coaching",
    "Executive Mentoring",
    "Learning Resources",
    "Online Course Access",
    "Premium Content Subscription",
    "Digital Asset Package",
)


class LabelPicker(Protocol):
    def pick(self, catalog: Sequence[str]) -> str:
        ...


class RandomLabelPicker:
    """Tirage uniforme; seed optionnel pour des tirages reproductibles."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def pick(self, catalog: Sequence[str]) -> str:
        return self._rng.choice(list(catalog))


class FixedLabelPicker:
    def __init__(self, label: str):
        self.label = label

    def pick(self, catalog: Sequence[str]) -> str:
        return self.label
