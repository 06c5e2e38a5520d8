from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from gestionlait.models.delivery import DeliveryRecord
from gestionlait.models.deposit import DepositRecord
from gestionlait.models.worker import Worker

"""
Model Snapshot.

Document JSON complet, réécrit en entier à chaque sauvegarde :
{"livreurs": [...], "livraisons": [...], "versements": [...]}
"""


class Snapshot(BaseModel):
    workers: List[Worker] = Field(default_factory=list, alias="livreurs")
    deliveries: List[DeliveryRecord] = Field(default_factory=list, alias="livraisons")
    deposits: List[DepositRecord] = Field(default_factory=list, alias="versements")

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

    def counts(self) -> Dict[str, int]:
        return {
            "livreurs": len(self.workers),
            "livraisons": len(self.deliveries),
            "versements": len(self.deposits),
        }
