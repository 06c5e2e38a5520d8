from datetime import datetime, timezone

from fastapi import APIRouter, Request

"""
API Health.

Rôle (fonctionnel) :
- Endpoint public pour vérifier que l’API répond.
- Expose quelques infos utiles (env, variante sécurisée ou non, volumétrie du store).
"""

router = APIRouter()


@router.get("/health")
def health(request: Request):
    settings = request.app.state.settings
    return {
        "status": "ok",
        "env": settings.ENV,
        "auth_enabled": settings.AUTH_ENABLED,
        "counts": request.app.state.store.counts(),
        "ts": datetime.now(timezone.utc).isoformat(),
    }
