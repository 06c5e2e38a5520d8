from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

"""
Schemas Statistiques (Pydantic).

Rôle (fonctionnel) :
- Contrat de sortie des agrégats mensuels : stats par livreur, stats complètes (solde),
  listes globales du mois, classement.
- Attributs en anglais côté code, clés JSON françaises (alias) côté API.
"""


class _Out(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class WorkerMonthStats(_Out):
    """Livraisons d’un livreur sur un mois."""
    days_worked: int = Field(alias="jours_travailles")
    total_quantity: float = Field(alias="total_litres")
    total_amount: float = Field(alias="total_montant")
    average_per_day: float = Field(alias="moyenne_par_jour")


class CombinedMonthStats(_Out):
    """Livraisons + versements d’un livreur sur un mois ; solde = livré - versé."""
    total_quantity: float = Field(alias="total_litres")
    total_delivery_amount: float = Field(alias="total_montant_livraisons")
    total_deposit_amount: float = Field(alias="total_versements")
    balance: float = Field(alias="solde")
    days_worked: int = Field(alias="jours_travailles")
    deposit_count: int = Field(alias="nombre_versements")


class DailyDeliveryRow(_Out):
    day: int = Field(alias="jour")
    quantity: float = Field(alias="quantite")
    total_amount: float = Field(alias="montant_total")


class GlobalDeliveryRow(DailyDeliveryRow):
    worker_name: str = Field(alias="livreur_nom")
    worker_id: str = Field(alias="livreur_id")


class GlobalDepositRow(_Out):
    id: str
    worker_id: str = Field(alias="livreur_id")
    worker_name: str = Field(alias="livreur_nom")
    day: int = Field(alias="jour")
    amount: float = Field(alias="montant")
    description: str
    created_at: str = Field(alias="date_creation")


class RankingRow(_Out):
    id: str
    name: str = Field(alias="nom")
    total_quantity: float = Field(alias="total_litres")
    total_amount: float = Field(alias="total_montant")
    days_worked: int = Field(alias="jours_travailles")
