from __future__ import annotations

import logging
import secrets
from typing import Optional

from fastapi import Request

from gestionlait.core.errors import AuthenticationError
from gestionlait.core.settings import Settings
from gestionlait.services.sessions import SessionRecord, SessionStore

"""
Core Security (session cookie).

Rôle (fonctionnel) :
- Vérifie le couple identifiant / mot de passe partagé (variante sécurisée).
- Fournit la dépendance FastAPI qui protège les routes métier : cookie de session présent,
  session connue et non expirée.

Comportement :
- AUTH_ENABLED=false : aucune vérification (variante non sécurisée).
- ADMIN_PASSWORD vide : tout login est refusé (et signalé dans les logs).

Notes :
- compare_digest() est utilisé pour éviter les comparaisons sensibles au timing.
"""

log = logging.getLogger("gestionlait.auth")


def check_credentials(settings: Settings, username: Optional[str], password: Optional[str]) -> bool:
    expected_password = settings.ADMIN_PASSWORD or ""
    if not expected_password:
        log.warning("ADMIN_PASSWORD vide : connexion impossible")
        return False

    user_ok = secrets.compare_digest((username or "").encode(), settings.ADMIN_USERNAME.encode())
    pass_ok = secrets.compare_digest((password or "").encode(), expected_password.encode())
    return user_ok and pass_ok


def session_token(request: Request) -> Optional[str]:
    settings: Settings = request.app.state.settings
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def require_session(request: Request) -> Optional[SessionRecord]:
    """
    Dépendance FastAPI : exige une session valide.

    Usage :
    - À brancher sur les routeurs métier (dependencies=[AuthDep]).
    - Lève AuthenticationError (401 générique) si la session est absente, inconnue ou expirée.
    """
    settings: Settings = request.app.state.settings
    if not settings.AUTH_ENABLED:
        return None

    sessions: SessionStore = request.app.state.sessions
    try:
        return sessions.validate(session_token(request))
    except AuthenticationError:
        log.info("unauthenticated", extra={"method": request.method, "path": request.url.path})
        raise
