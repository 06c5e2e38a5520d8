"""
gestionlait.models

Entités persistées dans le snapshot JSON (Pydantic).

Rôle (fonctionnel) :
- Centralise les entités métier (Worker, DeliveryRecord, DepositRecord) et le document complet (Snapshot).
- Attributs en anglais côté code, noms français (alias) côté JSON : un database.json existant
  (livreurs / livraisons / versements) se recharge tel quel.
"""

from gestionlait.models.worker import Worker
from gestionlait.models.delivery import DeliveryRecord
from gestionlait.models.deposit import DepositRecord
from gestionlait.models.snapshot import Snapshot

__all__ = ["Worker", "DeliveryRecord", "DepositRecord", "Snapshot"]
