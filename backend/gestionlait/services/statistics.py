from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from gestionlait.db.store import Store
from gestionlait.models import DeliveryRecord, DepositRecord, Worker
from gestionlait.schemas.stats import (
    CombinedMonthStats,
    DailyDeliveryRow,
    GlobalDeliveryRow,
    GlobalDepositRow,
    RankingRow,
    WorkerMonthStats,
)

"""
Statistics Service.

Rôle (fonctionnel) :
- Calcule les agrégats mensuels à partir des collections du Store :
  - stats d’un livreur (jours travaillés, litres, montant, moyenne par jour)
  - stats complètes (livraisons + versements => solde)
  - listes globales du mois (tous livreurs, nom joint)
  - classement des livreurs par litres livrés

Principe :
- Fonctions pures (listes en entrée, schémas en sortie) : testables sans Store ni HTTP.
- StatisticsService se contente de prendre un snapshot cohérent puis d’appeler ces fonctions.

Notes :
- Les tris sont stables : à jour égal (ou total égal), l’ordre d’insertion est conservé.
- Un livreur sans livraison apparaît dans le classement avec des totaux à 0.
"""

UNKNOWN_WORKER = "Inconnu"


def _in_month(record: DeliveryRecord | DepositRecord, year: int, month: int) -> bool:
    return record.year == year and record.month == month


def _worker_month(records: Iterable, worker_id: str, year: int, month: int) -> list:
    return [r for r in records if r.worker_id == worker_id and _in_month(r, year, month)]


def _names(workers: Iterable[Worker]) -> Dict[str, str]:
    return {w.id: w.name for w in workers}


def summarize_deliveries(deliveries: Sequence[DeliveryRecord]) -> WorkerMonthStats:
    """Agrège une liste de livraisons déjà filtrée."""
    days = len(deliveries)
    total_quantity = sum(d.quantity for d in deliveries)
    return WorkerMonthStats(
        days_worked=days,
        total_quantity=total_quantity,
        total_amount=sum(d.amount for d in deliveries),
        average_per_day=total_quantity / days if days else 0,
    )


def worker_month_stats(
    deliveries: Iterable[DeliveryRecord], worker_id: str, year: int, month: int
) -> WorkerMonthStats:
    return summarize_deliveries(_worker_month(deliveries, worker_id, year, month))


def combined_month_stats(
    deliveries: Iterable[DeliveryRecord],
    deposits: Iterable[DepositRecord],
    worker_id: str,
    year: int,
    month: int,
) -> CombinedMonthStats:
    stats = worker_month_stats(deliveries, worker_id, year, month)
    month_deposits = _worker_month(deposits, worker_id, year, month)
    total_deposits = sum(v.amount for v in month_deposits)

    return CombinedMonthStats(
        total_quantity=stats.total_quantity,
        total_delivery_amount=stats.total_amount,
        total_deposit_amount=total_deposits,
        balance=stats.total_amount - total_deposits,
        days_worked=stats.days_worked,
        deposit_count=len(month_deposits),
    )


def worker_deliveries(
    deliveries: Iterable[DeliveryRecord], worker_id: str, year: int, month: int
) -> List[DailyDeliveryRow]:
    rows = [
        DailyDeliveryRow(day=d.day, quantity=d.quantity, total_amount=d.amount)
        for d in _worker_month(deliveries, worker_id, year, month)
    ]
    return sorted(rows, key=lambda r: r.day)


def worker_deposits(
    deposits: Iterable[DepositRecord], worker_id: str, year: int, month: int
) -> List[DepositRecord]:
    return sorted(_worker_month(deposits, worker_id, year, month), key=lambda v: v.day)


def global_deliveries(
    workers: Iterable[Worker], deliveries: Iterable[DeliveryRecord], year: int, month: int
) -> List[GlobalDeliveryRow]:
    names = _names(workers)
    rows = [
        GlobalDeliveryRow(
            day=d.day,
            quantity=d.quantity,
            total_amount=d.amount,
            worker_name=names.get(d.worker_id, UNKNOWN_WORKER),
            worker_id=d.worker_id,
        )
        for d in deliveries
        if _in_month(d, year, month)
    ]
    return sorted(rows, key=lambda r: r.day)


def global_deposits(
    workers: Iterable[Worker], deposits: Iterable[DepositRecord], year: int, month: int
) -> List[GlobalDepositRow]:
    names = _names(workers)
    rows = [
        GlobalDepositRow(
            id=v.id,
            worker_id=v.worker_id,
            worker_name=names.get(v.worker_id, UNKNOWN_WORKER),
            day=v.day,
            amount=v.amount,
            description=v.description,
            created_at=v.created_at,
        )
        for v in deposits
        if _in_month(v, year, month)
    ]
    return sorted(rows, key=lambda r: r.day)


def ranking(
    workers: Iterable[Worker], deliveries: Sequence[DeliveryRecord], year: int, month: int
) -> List[RankingRow]:
    rows = []
    for worker in workers:
        stats = worker_month_stats(deliveries, worker.id, year, month)
        rows.append(
            RankingRow(
                id=worker.id,
                name=worker.name,
                total_quantity=stats.total_quantity,
                total_amount=stats.total_amount,
                days_worked=stats.days_worked,
            )
        )
    return sorted(rows, key=lambda r: r.total_quantity, reverse=True)


class StatisticsService:
    """Lecture : un snapshot cohérent du Store par appel."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def worker_month(self, worker_id: str, year: int, month: int) -> WorkerMonthStats:
        return worker_month_stats(self.store.snapshot().deliveries, worker_id, year, month)

    def combined(self, worker_id: str, year: int, month: int) -> CombinedMonthStats:
        snap = self.store.snapshot()
        return combined_month_stats(snap.deliveries, snap.deposits, worker_id, year, month)

    def worker_deliveries(self, worker_id: str, year: int, month: int) -> List[DailyDeliveryRow]:
        return worker_deliveries(self.store.snapshot().deliveries, worker_id, year, month)

    def worker_deposits(self, worker_id: str, year: int, month: int) -> List[DepositRecord]:
        return worker_deposits(self.store.snapshot().deposits, worker_id, year, month)

    def global_deliveries(self, year: int, month: int) -> List[GlobalDeliveryRow]:
        snap = self.store.snapshot()
        return global_deliveries(snap.workers, snap.deliveries, year, month)

    def global_deposits(self, year: int, month: int) -> List[GlobalDepositRow]:
        snap = self.store.snapshot()
        return global_deposits(snap.workers, snap.deposits, year, month)

    def ranking(self, year: int, month: int) -> List[RankingRow]:
        snap = self.store.snapshot()
        return ranking(snap.workers, snap.deliveries, year, month)
