from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from gestionlait.api.deps import AuthDep, get_records, get_statistics
from gestionlait.schemas.records import ResetDone
from gestionlait.schemas.stats import CombinedMonthStats, RankingRow, WorkerMonthStats
from gestionlait.services.records import RecordService
from gestionlait.services.statistics import StatisticsService

"""
API Statistiques.

Rôle (fonctionnel) :
- Stats mensuelles d’un livreur (jours travaillés, litres, montant, moyenne).
- Stats complètes d’un livreur (livraisons + versements => solde).
- Classement mensuel des livreurs (litres décroissants).
- Remise à zéro de toutes les données.
"""

router = APIRouter(prefix="/api", tags=["statistiques"], dependencies=[AuthDep])


@router.get("/stats/{livreur_id}/{annee}/{mois}", response_model=WorkerMonthStats)
def worker_stats(livreur_id: str, annee: int, mois: int, stats: StatisticsService = Depends(get_statistics)):
    return stats.worker_month(livreur_id, annee, mois)


@router.get("/statistiques-completes/{livreur_id}/{annee}/{mois}", response_model=CombinedMonthStats)
def combined_stats(livreur_id: str, annee: int, mois: int, stats: StatisticsService = Depends(get_statistics)):
    return stats.combined(livreur_id, annee, mois)


@router.get("/classement/{annee}/{mois}", response_model=List[RankingRow])
def month_ranking(annee: int, mois: int, stats: StatisticsService = Depends(get_statistics)):
    return stats.ranking(annee, mois)


@router.delete("/reset", response_model=ResetDone)
def reset_all(records: RecordService = Depends(get_records)):
    records.reset()
    return ResetDone()
