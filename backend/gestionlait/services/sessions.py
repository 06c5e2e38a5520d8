from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Callable, Dict, Optional

from gestionlait.core.errors import AuthenticationError

"""
Sessions Service.

Rôle (fonctionnel) :
- Stocke les sessions côté serveur : {token, created_at, expires_at}.
- Un login réussi crée une session (durée de vie fixe, 24h par défaut, comptée depuis la création).
- Toute route protégée vérifie le token (présent, connu, non expiré).
- Le logout invalide la session immédiatement.

Notes :
- Le message d’erreur est toujours le même (AuthenticationError) : on ne dit pas quelle
  vérification a échoué.
- Les sessions ne sont pas persistées : un redémarrage oblige à se reconnecter.
"""

log = logging.getLogger("gestionlait.sessions")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_token() -> str:
    """Génère un token de session opaque."""
    return secrets.token_urlsafe(32)


@dataclass(frozen=True)
class SessionRecord:
    token: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, at: datetime) -> bool:
        return at >= self.expires_at


class SessionStore:
    """Sessions en mémoire, thread-safe."""

    def __init__(
        self,
        ttl: timedelta = timedelta(hours=24),
        *,
        now: Callable[[], datetime] = _utc_now,
        token_factory: Callable[[], str] = generate_token,
    ) -> None:
        self.ttl = ttl
        self.now = now
        self.token_factory = token_factory
        self._lock = Lock()
        self._sessions: Dict[str, SessionRecord] = {}

    def create(self) -> SessionRecord:
        created = self.now()
        record = SessionRecord(token=self.token_factory(), created_at=created, expires_at=created + self.ttl)
        with self._lock:
            self._purge_expired(created)
            self._sessions[record.token] = record
        return record

    def validate(self, token: Optional[str]) -> SessionRecord:
        """Retourne la session valide associée au token, sinon AuthenticationError."""
        if not token:
            raise AuthenticationError()

        at = self.now()
        with self._lock:
            record = self._sessions.get(token)
            if record is None:
                raise AuthenticationError()
            if record.is_expired(at):
                del self._sessions[token]
                log.info("session_expired")
                raise AuthenticationError()
        return record

    def revoke(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def active_count(self) -> int:
        with self._lock:
            self._purge_expired(self.now())
            return len(self._sessions)

    def _purge_expired(self, at: datetime) -> None:
        expired = [t for t, r in self._sessions.items() if r.is_expired(at)]
        for token in expired:
            del self._sessions[token]
