from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from gestionlait.models import DepositRecord

"""
Schemas Records (Pydantic).

Rôle (fonctionnel) :
- Contrat HTTP des mutations (livreurs, livraisons, versements).
- Clés camelCase historiques côté front (livreurId, annee, mois, jour, quantite, montant).

Notes :
- Les champs sont volontairement permissifs (Any) : la quantité peut arriver vide ou non numérique
  (elle vaut alors 0) et les champs manquants doivent produire une ValidationError métier (400),
  pas une erreur de schéma. La coercition est faite dans services.records.
"""


class _In(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WorkerCreate(_In):
    name: Optional[Any] = Field(default=None, alias="nom")


class DeliveryUpsert(_In):
    worker_id: Optional[Any] = Field(default=None, alias="livreurId")
    year: Optional[Any] = Field(default=None, alias="annee")
    month: Optional[Any] = Field(default=None, alias="mois")
    day: Optional[Any] = Field(default=None, alias="jour")
    quantity: Optional[Any] = Field(default=None, alias="quantite")


class DepositCreate(_In):
    worker_id: Optional[Any] = Field(default=None, alias="livreurId")
    year: Optional[Any] = Field(default=None, alias="annee")
    month: Optional[Any] = Field(default=None, alias="mois")
    day: Optional[Any] = Field(default=None, alias="jour")
    amount: Optional[Any] = Field(default=None, alias="montant")
    description: Optional[Any] = None


class DeliveryAck(BaseModel):
    """Accusé d’upsert : deleted présent uniquement quand la quantité valait 0."""
    success: bool = True
    deleted: Optional[bool] = None


class DepositCreated(BaseModel):
    success: bool = True
    versement: DepositRecord


class Deleted(BaseModel):
    deleted: bool = True


class ResetDone(BaseModel):
    success: bool = True
    message: str = "Toutes les données ont été effacées"
