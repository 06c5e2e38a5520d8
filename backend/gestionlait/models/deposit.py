from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

"""
Model DepositRecord (versement).

Rôle (fonctionnel) :
- Versement d’espèces fait par (ou pour) un livreur un jour donné.
- Pas d’unicité par jour : plusieurs versements le même jour sont permis.
"""

DEFAULT_DESCRIPTION = "Versement"


class DepositRecord(BaseModel):
    id: str
    worker_id: str = Field(alias="livreur_id")
    year: int = Field(alias="annee")
    month: int = Field(alias="mois")
    day: int = Field(alias="jour")
    amount: float = Field(alias="montant")
    description: str = DEFAULT_DESCRIPTION
    created_at: str = Field(alias="date_creation")

    model_config = ConfigDict(populate_by_name=True)
