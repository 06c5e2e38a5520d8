from __future__ import annotations

import logging
from contextlib import contextmanager
from threading import RLock
from typing import Iterator

from gestionlait.core.errors import PersistenceError
from gestionlait.db.backends import PersistenceBackend
from gestionlait.models import Snapshot

"""
DB Store.

Rôle (fonctionnel) :
- Possède les trois collections en mémoire (livreurs, livraisons, versements).
- Recharge le snapshot au démarrage, le réécrit après chaque mutation
  (et périodiquement via la tâche d’autosave de main.py).

Concurrence :
- FastAPI exécute les endpoints sync dans un pool de threads : toutes les mutations passent par
  write(), qui tient un verrou unique (un seul écrivain) jusqu’à la fin de la sauvegarde.
- Les lectures (snapshot()) prennent le même verrou et renvoient une copie profonde :
  jamais d’état partiellement muté.

Erreurs :
- Échec au chargement : store vide + log (non bloquant).
- Échec à la sauvegarde : log, la mutation en mémoire est conservée (source de vérité).
"""

log = logging.getLogger("gestionlait.store")


class Store:
    def __init__(self, backend: PersistenceBackend) -> None:
        self.backend = backend
        self._lock = RLock()
        self._changed = False
        self._data = Snapshot()

    def load(self) -> Snapshot:
        """Charge le snapshot persistant (ou part d’un store vide)."""
        with self._lock:
            try:
                loaded = self.backend.load()
            except PersistenceError:
                log.exception("Chargement du snapshot impossible, démarrage sur une base vide")
                self._data = Snapshot()
                return self.snapshot()

            if loaded is None:
                self._data = Snapshot()
                log.info("Nouvelle base de données créée")
                self.save()
            else:
                self._data = loaded
                log.info("Base de données chargée", extra={"counts": loaded.counts()})
            return self.snapshot()

    def save(self) -> bool:
        """Réécrit le snapshot complet. Ne lève jamais : retourne False en cas d’échec."""
        with self._lock:
            try:
                self.backend.save(self._data)
            except PersistenceError:
                log.exception("Erreur de sauvegarde", extra={"counts": self._data.counts()})
                return False
        return True

    def snapshot(self) -> Snapshot:
        """Copie cohérente des trois collections (lecture)."""
        with self._lock:
            return self._data.model_copy(deep=True)

    @contextmanager
    def write(self) -> Iterator[Snapshot]:
        """
        Section critique de mutation.

        Le bloc reçoit les collections vivantes ; la sauvegarde n’a lieu que si le bloc se termine
        sans exception (les erreurs de validation sont levées avant toute modification) et
        qu’il n’a pas appelé mark_unchanged().
        """
        with self._lock:
            self._changed = True
            yield self._data
            if self._changed:
                self.save()

    def mark_unchanged(self) -> None:
        """À appeler dans un bloc write() qui n’a finalement rien modifié : pas de réécriture."""
        self._changed = False

    def counts(self) -> dict[str, int]:
        with self._lock:
            return self._data.counts()
