from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response

from gestionlait.core.errors import AuthenticationError
from gestionlait.core.security import check_credentials, session_token
from gestionlait.core.settings import Settings
from gestionlait.schemas.auth import LoginRequest, SessionOut
from gestionlait.services.sessions import SessionStore

"""
API Auth.

Rôle (fonctionnel) :
- Login : vérifie les identifiants partagés, crée une session serveur, pose le cookie (HttpOnly).
- Logout : invalide la session immédiatement et efface le cookie.
- Session : indique si l’appelant est authentifié (utilisé par le front au chargement).
"""

router = APIRouter(prefix="/api/auth", tags=["auth"])
log = logging.getLogger("gestionlait.auth")


@router.post("/login", response_model=SessionOut)
def login(payload: LoginRequest, request: Request, response: Response):
    settings: Settings = request.app.state.settings
    sessions: SessionStore = request.app.state.sessions

    if not check_credentials(settings, payload.username, payload.password):
        log.warning("login_failed", extra={"client_ip": request.client.host if request.client else None})
        raise AuthenticationError()

    record = sessions.create()
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=record.token,
        max_age=int(sessions.ttl.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    log.info("login_success")
    return SessionOut(authenticated=True, expires_at=record.expires_at)


@router.post("/logout", response_model=SessionOut)
def logout(request: Request, response: Response):
    settings: Settings = request.app.state.settings
    sessions: SessionStore = request.app.state.sessions

    sessions.revoke(session_token(request))
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return SessionOut(authenticated=False)


@router.get("/session", response_model=SessionOut)
def session_status(request: Request):
    settings: Settings = request.app.state.settings
    if not settings.AUTH_ENABLED:
        return SessionOut(authenticated=True)

    sessions: SessionStore = request.app.state.sessions
    try:
        record = sessions.validate(session_token(request))
    except AuthenticationError:
        return SessionOut(authenticated=False)
    return SessionOut(authenticated=True, expires_at=record.expires_at)
