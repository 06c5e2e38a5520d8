from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from gestionlait.api.deps import AuthDep, get_records, get_statistics
from gestionlait.schemas.records import DeliveryAck, DeliveryUpsert
from gestionlait.schemas.stats import DailyDeliveryRow, GlobalDeliveryRow
from gestionlait.services.records import RecordService
from gestionlait.services.statistics import StatisticsService

"""
API Livraisons.

Rôle (fonctionnel) :
- Livraisons d’un livreur pour un mois (jour, quantité, montant).
- Livraisons de tous les livreurs pour un mois (avec le nom du livreur).
- Saisie d’une livraison : création, modification, ou suppression si la quantité vaut 0.

Notes :
- La route /global/... est déclarée avant /{livreur_id}/... (même nombre de segments).
"""

router = APIRouter(prefix="/api/livraisons", tags=["livraisons"], dependencies=[AuthDep])


@router.get("/global/{annee}/{mois}", response_model=List[GlobalDeliveryRow])
def list_month_deliveries(annee: int, mois: int, stats: StatisticsService = Depends(get_statistics)):
    return stats.global_deliveries(annee, mois)


@router.get("/{livreur_id}/{annee}/{mois}", response_model=List[DailyDeliveryRow])
def list_worker_deliveries(
    livreur_id: str,
    annee: int,
    mois: int,
    stats: StatisticsService = Depends(get_statistics),
):
    return stats.worker_deliveries(livreur_id, annee, mois)


@router.post("", response_model=DeliveryAck, response_model_exclude_none=True)
def upsert_delivery(payload: DeliveryUpsert, records: RecordService = Depends(get_records)):
    result = records.upsert_delivery(
        payload.worker_id,
        payload.year,
        payload.month,
        payload.day,
        payload.quantity,
    )
    return DeliveryAck(**result.as_payload())
