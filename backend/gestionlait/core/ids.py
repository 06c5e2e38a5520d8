from __future__ import annotations

import itertools
import uuid
from threading import Lock
from typing import Protocol

"""
Core IDs.

Rôle (fonctionnel) :
- Fournit les identifiants opaques des livreurs, livraisons et versements.
- Découplé de l’horloge : un id ne dit rien de la date de création.

Implémentations :
- UuidGenerator : token aléatoire 128 bits (hex), utilisé en production.
- CounterGenerator : ids séquentiels prévisibles ("id-1", "id-2"…), pratique en tests.
"""


class IdGenerator(Protocol):
    def __call__(self) -> str: ...


class UuidGenerator:
    def __call__(self) -> str:
        return uuid.uuid4().hex


class CounterGenerator:
    """Compteur monotone thread-safe."""

    def __init__(self, prefix: str = "id", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)
        self._lock = Lock()

    def __call__(self) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{self._prefix}-{n}"
