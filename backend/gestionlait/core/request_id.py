from __future__ import annotations

import uuid
from contextvars import ContextVar

from starlette.requests import Request

"""
Core Request ID.

Rôle (fonctionnel) :
- Identifiant de requête (request_id) stocké dans un ContextVar, repris du header X-Request-Id
  ou généré (UUID).
- Utilisé par le logging (injection dans chaque ligne) et par les handlers d’erreurs
  (champ request_id du payload).
"""

REQUEST_ID_HEADER = "X-Request-Id"

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(rid: str | None) -> None:
    _request_id.set(rid)


def get_request_id() -> str | None:
    return _request_id.get()


def ensure_request_id(incoming: str | None = None) -> str:
    """Réutilise le request_id entrant (nettoyé) ou en génère un nouveau."""
    rid = (incoming or "").strip() or str(uuid.uuid4())
    set_request_id(rid)
    return rid


def request_id_for(request: Request) -> str:
    """request_id de la requête courante : state > contextvar > nouvel UUID."""
    return getattr(request.state, "request_id", None) or get_request_id() or str(uuid.uuid4())
