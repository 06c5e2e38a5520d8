from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from pathlib import Path

from gestionlait.core.errors import PersistenceError
from gestionlait.core.ids import CounterGenerator
from gestionlait.db import JsonFileBackend, MemoryBackend, Store
from gestionlait.main import _autosave_loop
from gestionlait.models import Snapshot
from gestionlait.services.records import RecordService

LEGACY_DOCUMENT = {
    "livreurs": [{"id": "1709280000000abc", "nom": "Ali", "date_ajout": "2024-03-01T08:00:00.000Z"}],
    "livraisons": [
        {
            "livreur_id": "1709280000000abc",
            "annee": 2024,
            "mois": 3,
            "jour": 1,
            "quantite": 10,
            "prix_unitaire": 75,
            "date_saisie": "2024-03-01T08:00:00.000Z",
            "id": "1709280000001def",
        }
    ],
    "versements": [
        {
            "id": "1709280000002ghi",
            "livreur_id": "1709280000000abc",
            "annee": 2024,
            "mois": 3,
            "jour": 1,
            "montant": 200,
            "description": "Versement",
            "date_creation": "2024-03-01T09:00:00.000Z",
        }
    ],
}


class BrokenBackend(MemoryBackend):
    def save(self, snapshot: Snapshot) -> None:
        raise PersistenceError("disque plein")


def test_missing_file_creates_empty_database(tmp_path: Path) -> None:
    path = tmp_path / "database.json"
    store = Store(JsonFileBackend(path))

    snap = store.load()

    assert snap.counts() == {"livreurs": 0, "livraisons": 0, "versements": 0}
    assert json.loads(path.read_text(encoding="utf-8")) == {"livreurs": [], "livraisons": [], "versements": []}


def test_file_is_rewritten_with_french_layout(tmp_path: Path) -> None:
    path = tmp_path / "data" / "database.json"
    store = Store(JsonFileBackend(path))
    store.load()
    records = RecordService(store, ids=CounterGenerator(), now=lambda: "t0")

    ali = records.add_worker("Ali")
    records.upsert_delivery(ali.id, 2024, 3, 1, 10)

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["livreurs"] == [{"id": "id-1", "nom": "Ali", "date_ajout": "t0"}]
    assert document["livraisons"][0] == {
        "id": "id-2",
        "livreur_id": "id-1",
        "annee": 2024,
        "mois": 3,
        "jour": 1,
        "quantite": 10.0,
        "prix_unitaire": 75.0,
        "date_saisie": "t0",
    }
    assert document["versements"] == []
    assert list(path.parent.iterdir()) == [path]


def test_reload_from_legacy_document(tmp_path: Path) -> None:
    path = tmp_path / "database.json"
    path.write_text(json.dumps(LEGACY_DOCUMENT), encoding="utf-8")

    snap = Store(JsonFileBackend(path)).load()

    assert snap.workers[0].name == "Ali"
    assert snap.deliveries[0].amount == 750
    assert snap.deposits[0].amount == 200


def test_corrupted_file_falls_back_to_empty_store(tmp_path: Path) -> None:
    path = tmp_path / "database.json"
    path.write_text("{ pas du json", encoding="utf-8")
    store = Store(JsonFileBackend(path))

    snap = store.load()

    assert snap.counts() == {"livreurs": 0, "livraisons": 0, "versements": 0}
    # le fichier illisible n’est pas écrasé au chargement
    assert path.read_text(encoding="utf-8") == "{ pas du json"


def test_invalid_document_falls_back_to_empty_store() -> None:
    store = Store(MemoryBackend({"livreurs": [{"id": "1"}]}))

    assert store.load().workers == []


def test_save_failure_keeps_mutation_in_memory() -> None:
    store = Store(BrokenBackend())
    store.load()
    records = RecordService(store, ids=CounterGenerator())

    worker = records.add_worker("Ali")

    assert store.save() is False
    assert [w.id for w in store.snapshot().workers] == [worker.id]


def test_snapshot_is_a_copy(store: Store, records: RecordService) -> None:
    records.add_worker("Ali")

    snap = store.snapshot()
    snap.workers.clear()

    assert store.counts()["livreurs"] == 1


class FlakyBackend(MemoryBackend):
    """Échoue à chaque sauvegarde, une fois sur deux par une erreur inattendue."""

    def __init__(self) -> None:
        super().__init__()
        self.attempts = 0

    def save(self, snapshot: Snapshot) -> None:
        self.attempts += 1
        if self.attempts % 2:
            raise PersistenceError("disque plein")
        raise RuntimeError("montage réseau perdu")


def test_autosave_loop_survives_failed_saves(caplog) -> None:
    backend = FlakyBackend()
    store = Store(backend)

    async def scenario() -> bool:
        task = asyncio.create_task(_autosave_loop(store, 0.01))
        for _ in range(300):
            await asyncio.sleep(0.01)
            if backend.attempts >= 4:
                break
        still_running = not task.done()
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        return still_running

    with caplog.at_level(logging.INFO):
        assert asyncio.run(scenario()) is True

    assert backend.attempts >= 4
    messages = [r.getMessage() for r in caplog.records]
    assert "Erreur de sauvegarde" in messages
    assert "Sauvegarde automatique en échec" in messages
    assert "Sauvegarde automatique effectuée" not in messages


def test_autosave_loop_writes_current_state() -> None:
    backend = MemoryBackend()
    store = Store(backend)
    store.load()
    RecordService(store, ids=CounterGenerator()).add_worker("Ali")
    backend.document = None

    async def scenario() -> None:
        task = asyncio.create_task(_autosave_loop(store, 0.01))
        for _ in range(300):
            await asyncio.sleep(0.01)
            if backend.document is not None:
                break
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    asyncio.run(scenario())

    assert [w["nom"] for w in backend.document["livreurs"]] == ["Ali"]
