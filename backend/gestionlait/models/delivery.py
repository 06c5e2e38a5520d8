from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

"""
Model DeliveryRecord (livraison).

Rôle (fonctionnel) :
- Quantité livrée par un livreur sur une journée, valorisée au prix unitaire du moment.

Clé naturelle :
- (worker_id, year, month, day) : au plus une livraison par clé.
  L’unicité est garantie par l’upsert (services.records), pas par un rejet des doublons.
"""

NaturalKey = Tuple[str, int, int, int]


class DeliveryRecord(BaseModel):
    id: str
    worker_id: str = Field(alias="livreur_id")
    year: int = Field(alias="annee")
    month: int = Field(alias="mois")
    day: int = Field(alias="jour")
    quantity: float = Field(alias="quantite")
    unit_price: float = Field(alias="prix_unitaire")
    recorded_at: str = Field(alias="date_saisie")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def amount(self) -> float:
        """Montant de la journée (quantité x prix unitaire)."""
        return self.quantity * self.unit_price

    @property
    def key(self) -> NaturalKey:
        return (self.worker_id, self.year, self.month, self.day)
