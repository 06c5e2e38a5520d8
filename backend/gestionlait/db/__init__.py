"""
gestionlait.db

Persistance : Store en mémoire (verrou unique) + backends de snapshot (fichier JSON, mémoire).
"""

from gestionlait.db.backends import JsonFileBackend, MemoryBackend, PersistenceBackend
from gestionlait.db.store import Store

__all__ = ["JsonFileBackend", "MemoryBackend", "PersistenceBackend", "Store"]
