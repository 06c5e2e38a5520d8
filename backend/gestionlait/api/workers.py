from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from gestionlait.api.deps import AuthDep, get_records
from gestionlait.models import Worker
from gestionlait.schemas.records import Deleted, WorkerCreate
from gestionlait.services.records import RecordService

"""
API Livreurs.

Rôle (fonctionnel) :
- Liste des livreurs (triée par nom).
- Ajout d’un livreur (nom requis, unique sans tenir compte de la casse).
- Suppression d’un livreur, avec ses livraisons et ses versements.
"""

router = APIRouter(prefix="/api/livreurs", tags=["livreurs"], dependencies=[AuthDep])


@router.get("", response_model=List[Worker])
def list_workers(records: RecordService = Depends(get_records)):
    return records.list_workers()


@router.post("", response_model=Worker)
def create_worker(payload: WorkerCreate, records: RecordService = Depends(get_records)):
    return records.add_worker(payload.name)


@router.delete("/{worker_id}", response_model=Deleted)
def delete_worker(worker_id: str, records: RecordService = Depends(get_records)):
    records.delete_worker(worker_id)
    return Deleted()
