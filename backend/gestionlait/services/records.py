from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from gestionlait.core.errors import ConflictError, NotFoundError, ValidationError
from gestionlait.core.ids import IdGenerator, UuidGenerator
from gestionlait.db.store import Store
from gestionlait.models import DeliveryRecord, DepositRecord, Snapshot, Worker
from gestionlait.models.deposit import DEFAULT_DESCRIPTION
from gestionlait.models.worker import normalize_name

"""
Records Service (livreurs / livraisons / versements).

Rôle (fonctionnel) :
- Création / suppression des livreurs (nom unique, suppression en cascade).
- Upsert des livraisons sur la clé naturelle (livreur, année, mois, jour) :
  - quantité 0 (ou absente / non numérique) => suppression de la livraison du jour,
  - sinon mise à jour en place, ou création avec le prix unitaire courant.
- Création / suppression des versements (pas d’unicité par jour).
- Remise à zéro complète.

Principe :
- Toute la validation est faite avant d’entrer dans Store.write() : une erreur ne laisse
  aucune mutation partielle.
- Chaque mutation réussie est suivie d’une sauvegarde synchrone du snapshot (Store.write()).
"""

log = logging.getLogger("gestionlait.records")

DEFAULT_UNIT_PRICE = 75.0
INCOMPLETE = "Données incomplètes"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# -----------------------------
# Coercition des entrées brutes
# -----------------------------
def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _required_id(value: Any, field: str) -> str:
    if _is_missing(value):
        raise ValidationError(INCOMPLETE, details={"field": field})
    return str(value).strip()


def _required_int(value: Any, field: str, lo: int, hi: Optional[int] = None) -> int:
    """Entier obligatoire borné (année, mois, jour). Accepte "3" ou 3.0, refuse "3.5" / "abc"."""
    if _is_missing(value):
        raise ValidationError(INCOMPLETE, details={"field": field})
    if isinstance(value, bool):
        raise ValidationError(f"Valeur invalide pour {field}", details={"field": field})
    try:
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(value)
            n = int(value)
        else:
            n = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"Valeur invalide pour {field}", details={"field": field}) from None

    if n < lo or (hi is not None and n > hi):
        raise ValidationError(f"Valeur hors limites pour {field}", details={"field": field, "value": n})
    return n


def _to_real(value: Any) -> Optional[float]:
    """Réel fini, ou None si la valeur n’est pas numérique."""
    if value is None or isinstance(value, bool):
        return None
    try:
        x = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    return x if math.isfinite(x) else None


def coerce_quantity(value: Any) -> float:
    """Quantité livrée : absente / non numérique => 0 ; négative => erreur."""
    qty = _to_real(value)
    if qty is None:
        return 0.0
    if qty < 0:
        raise ValidationError("La quantité ne peut pas être négative", details={"field": "quantite"})
    return qty


def coerce_amount(value: Any) -> float:
    if _is_missing(value):
        raise ValidationError(INCOMPLETE, details={"field": "montant"})
    amount = _to_real(value)
    if amount is None:
        raise ValidationError("Montant invalide", details={"field": "montant"})
    if amount <= 0:
        raise ValidationError("Le montant doit être positif", details={"field": "montant"})
    return amount


@dataclass(frozen=True)
class DayKey:
    worker_id: str
    year: int
    month: int
    day: int

    @classmethod
    def parse(cls, worker_id: Any, year: Any, month: Any, day: Any) -> "DayKey":
        return cls(
            worker_id=_required_id(worker_id, "livreurId"),
            year=_required_int(year, "annee", 1),
            month=_required_int(month, "mois", 1, 12),
            day=_required_int(day, "jour", 1, 31),
        )


@dataclass(frozen=True)
class UpsertResult:
    """Accusé de réception d’un upsert de livraison."""
    deleted: bool
    created: bool = False
    record: Optional[DeliveryRecord] = None

    def as_payload(self) -> dict:
        if self.deleted:
            return {"success": True, "deleted": True}
        return {"success": True}


@dataclass(frozen=True)
class WorkerDeletion:
    worker: Worker
    deliveries_removed: int
    deposits_removed: int


def _find_worker(data: Snapshot, worker_id: str) -> Optional[Worker]:
    return next((w for w in data.workers if w.id == worker_id), None)


class RecordService:
    """
    Gestionnaire des enregistrements (use-cases de mutation).

    Dépendances injectables :
    - ids : générateur d’identifiants (UUID par défaut).
    - now : horloge ISO-8601 UTC.
    - unit_price : prix appliqué aux livraisons créées / mises à jour.
    """

    def __init__(
        self,
        store: Store,
        *,
        ids: IdGenerator | None = None,
        now: Callable[[], str] = utc_now_iso,
        unit_price: float = DEFAULT_UNIT_PRICE,
    ) -> None:
        self.store = store
        self.ids = ids or UuidGenerator()
        self.now = now
        self.unit_price = unit_price

    # --- Livreurs ---
    def list_workers(self) -> List[Worker]:
        workers = self.store.snapshot().workers
        return sorted(workers, key=lambda w: w.name_key)

    def add_worker(self, name: Any) -> Worker:
        clean = name.strip() if isinstance(name, str) else ""
        if not clean:
            raise ValidationError("Le nom est requis", details={"field": "nom"})

        key = normalize_name(clean)
        with self.store.write() as data:
            if any(w.name_key == key for w in data.workers):
                raise ConflictError("Ce livreur existe déjà", details={"nom": clean})

            worker = Worker(id=self.ids(), name=clean, created_at=self.now())
            data.workers.append(worker)

        log.info("worker_created", extra={"worker_id": worker.id})
        return worker.model_copy()

    def delete_worker(self, worker_id: str) -> WorkerDeletion:
        with self.store.write() as data:
            worker = _find_worker(data, worker_id)
            if worker is None:
                raise NotFoundError("Livreur non trouvé", details={"id": worker_id})

            n_deliveries = len(data.deliveries)
            n_deposits = len(data.deposits)
            data.deliveries = [d for d in data.deliveries if d.worker_id != worker_id]
            data.deposits = [v for v in data.deposits if v.worker_id != worker_id]
            data.workers = [w for w in data.workers if w.id != worker_id]

            result = WorkerDeletion(
                worker=worker,
                deliveries_removed=n_deliveries - len(data.deliveries),
                deposits_removed=n_deposits - len(data.deposits),
            )

        log.info(
            "worker_deleted",
            extra={
                "worker_id": worker_id,
                "counts": {"livraisons": result.deliveries_removed, "versements": result.deposits_removed},
            },
        )
        return result

    # --- Livraisons ---
    def upsert_delivery(self, worker_id: Any, year: Any, month: Any, day: Any, quantity: Any) -> UpsertResult:
        key = DayKey.parse(worker_id, year, month, day)
        qty = coerce_quantity(quantity)

        with self.store.write() as data:
            natural_key = (key.worker_id, key.year, key.month, key.day)
            index = next((i for i, d in enumerate(data.deliveries) if d.key == natural_key), None)

            # Suppression par clé naturelle, même si le livreur n’existe plus
            if qty == 0:
                if index is None:
                    self.store.mark_unchanged()
                else:
                    removed = data.deliveries.pop(index)
                    log.info("delivery_deleted", extra={"worker_id": key.worker_id, "record_id": removed.id})
                return UpsertResult(deleted=True)

            if _find_worker(data, key.worker_id) is None:
                raise NotFoundError("Livreur non trouvé", details={"id": key.worker_id})

            if index is not None:
                record = data.deliveries[index]
                record.quantity = qty
                record.unit_price = self.unit_price
                record.recorded_at = self.now()
                created = False
            else:
                record = DeliveryRecord(
                    id=self.ids(),
                    worker_id=key.worker_id,
                    year=key.year,
                    month=key.month,
                    day=key.day,
                    quantity=qty,
                    unit_price=self.unit_price,
                    recorded_at=self.now(),
                )
                data.deliveries.append(record)
                created = True

            result = UpsertResult(deleted=False, created=created, record=record.model_copy())

        log.info(
            "delivery_created" if created else "delivery_updated",
            extra={"worker_id": key.worker_id, "record_id": result.record.id},
        )
        return result

    # --- Versements ---
    def add_deposit(
        self,
        worker_id: Any,
        year: Any,
        month: Any,
        day: Any,
        amount: Any,
        description: Any = None,
    ) -> DepositRecord:
        key = DayKey.parse(worker_id, year, month, day)
        value = coerce_amount(amount)
        label = description.strip() if isinstance(description, str) and description.strip() else DEFAULT_DESCRIPTION

        with self.store.write() as data:
            if _find_worker(data, key.worker_id) is None:
                raise NotFoundError("Livreur non trouvé", details={"id": key.worker_id})

            deposit = DepositRecord(
                id=self.ids(),
                worker_id=key.worker_id,
                year=key.year,
                month=key.month,
                day=key.day,
                amount=value,
                description=label,
                created_at=self.now(),
            )
            data.deposits.append(deposit)

        log.info("deposit_created", extra={"worker_id": key.worker_id, "record_id": deposit.id})
        return deposit.model_copy()

    def delete_deposit(self, deposit_id: str) -> None:
        with self.store.write() as data:
            index = next((i for i, v in enumerate(data.deposits) if v.id == deposit_id), None)
            if index is None:
                raise NotFoundError("Versement non trouvé", details={"id": deposit_id})
            removed = data.deposits.pop(index)

        log.info("deposit_deleted", extra={"worker_id": removed.worker_id, "record_id": deposit_id})

    # --- Maintenance ---
    def reset(self) -> None:
        """Efface toutes les données (livreurs, livraisons, versements)."""
        with self.store.write() as data:
            data.workers = []
            data.deliveries = []
            data.deposits = []
        log.warning("store_reset")
