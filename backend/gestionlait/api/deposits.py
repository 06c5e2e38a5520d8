from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from gestionlait.api.deps import AuthDep, get_records, get_statistics
from gestionlait.models import DepositRecord
from gestionlait.schemas.records import Deleted, DepositCreate, DepositCreated
from gestionlait.schemas.stats import GlobalDepositRow
from gestionlait.services.records import RecordService
from gestionlait.services.statistics import StatisticsService

"""
API Versements.

Rôle (fonctionnel) :
- Versements d’un livreur pour un mois / de tous les livreurs pour un mois.
- Enregistrement d’un versement (toujours une nouvelle ligne).
- Suppression d’un versement par id.
"""

router = APIRouter(prefix="/api/versements", tags=["versements"], dependencies=[AuthDep])


@router.get("/global/{annee}/{mois}", response_model=List[GlobalDepositRow])
def list_month_deposits(annee: int, mois: int, stats: StatisticsService = Depends(get_statistics)):
    return stats.global_deposits(annee, mois)


@router.get("/{livreur_id}/{annee}/{mois}", response_model=List[DepositRecord])
def list_worker_deposits(
    livreur_id: str,
    annee: int,
    mois: int,
    stats: StatisticsService = Depends(get_statistics),
):
    return stats.worker_deposits(livreur_id, annee, mois)


@router.post("", response_model=DepositCreated)
def create_deposit(payload: DepositCreate, records: RecordService = Depends(get_records)):
    deposit = records.add_deposit(
        payload.worker_id,
        payload.year,
        payload.month,
        payload.day,
        payload.amount,
        payload.description,
    )
    return DepositCreated(versement=deposit)


@router.delete("/{deposit_id}", response_model=Deleted)
def delete_deposit(deposit_id: str, records: RecordService = Depends(get_records)):
    records.delete_deposit(deposit_id)
    return Deleted()
