from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from gestionlait.core.errors import PersistenceError
from gestionlait.models import Snapshot

"""
DB Backends (port de persistance).

Rôle (fonctionnel) :
- Abstraction minimale load()/save() utilisée par le Store.
- JsonFileBackend : un seul fichier JSON, réécrit en entier à chaque sauvegarde.
- MemoryBackend : document gardé en mémoire (tests, démo sans disque).

Contrat :
- load() -> Snapshot, ou None s’il n’existe encore aucun snapshot.
- load() / save() lèvent PersistenceError en cas d’échec (lecture, parse, écriture).
"""


class PersistenceBackend(Protocol):
    def load(self) -> Optional[Snapshot]: ...

    def save(self, snapshot: Snapshot) -> None: ...


class JsonFileBackend:
    """
    Snapshot JSON sur disque.

    Notes :
    - Écriture dans un fichier temporaire du même dossier puis os.replace() :
      un crash pendant l’écriture laisse l’ancien fichier intact.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> Optional[Snapshot]:
        if not self.path.exists():
            return None
        try:
            raw = self.path.read_text(encoding="utf-8")
            return Snapshot.model_validate(json.loads(raw))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Lecture impossible de {self.path}", details=str(exc)) from exc

    def save(self, snapshot: Snapshot) -> None:
        data = json.dumps(snapshot.to_document(), indent=2, ensure_ascii=False)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(data)
                os.replace(tmp, self.path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as exc:
            raise PersistenceError(f"Écriture impossible de {self.path}", details=str(exc)) from exc

    def __repr__(self) -> str:
        return f"JsonFileBackend({str(self.path)!r})"


class MemoryBackend:
    """Backend en mémoire : conserve le dernier document sauvegardé (format JSON)."""

    def __init__(self, document: Optional[Dict[str, Any]] = None) -> None:
        self.document = document
        self.saves = 0

    def load(self) -> Optional[Snapshot]:
        if self.document is None:
            return None
        try:
            return Snapshot.model_validate(self.document)
        except ValueError as exc:
            raise PersistenceError("Snapshot mémoire invalide", details=str(exc)) from exc

    def save(self, snapshot: Snapshot) -> None:
        self.document = snapshot.to_document()
        self.saves += 1
