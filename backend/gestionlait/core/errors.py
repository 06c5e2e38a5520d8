from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

"""
Core Errors.

Rôle (fonctionnel) :
- Standardise le format des erreurs renvoyées par l’API (payload homogène).
- Définit la hiérarchie d’exceptions métier levées par les services (store, records, sessions).
  Les services ne connaissent pas HTTP : chaque exception porte seulement un status et un code stables,
  la traduction en réponse est faite par les handlers de main.py.

Convention de réponse (exemple) :
{
  "error": {
    "code": "NOT_FOUND",
    "message": "Livreur non trouvé",
    "status": 404,
    "request_id": "...",
    "timestamp": "...",
    "details": {...}
  }
}
"""


def now_iso() -> str:
    """Timestamp ISO-8601 en UTC (utilisé dans toutes les erreurs)."""
    return datetime.now(timezone.utc).isoformat()


def error_payload(
    *,
    code: str,
    message: str,
    status: int,
    request_id: str,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    """Construit un payload d’erreur homogène pour l’API."""
    payload: Dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
            "status": status,
            "request_id": request_id,
            "timestamp": now_iso(),
        }
    }
    if details is not None:
        payload["error"]["details"] = details
    return payload


class AppError(Exception):
    """
    Exception applicative standardisée.

    Usage :
    - Lever une erreur “métier” avec un code stable et un message explicite.
    - Laisser la couche API produire une réponse cohérente (status + error_payload).

    Exemple :
        raise NotFoundError("Versement non trouvé")
    """

    status: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(AppError):
    """Entrée manquante ou mal formée."""
    status = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(AppError):
    """Session absente, invalide ou expirée (message volontairement générique)."""
    status = 401
    code = "UNAUTHENTICATED"

    def __init__(self, message: str = "Non authentifié", details: Any = None):
        super().__init__(message, details)


class NotFoundError(AppError):
    status = 404
    code = "NOT_FOUND"


class ConflictError(AppError):
    """Nom de livreur déjà utilisé."""
    status = 409
    code = "CONFLICT"


class PersistenceError(AppError):
    """Échec de lecture / écriture du snapshot."""
    status = 500
    code = "PERSISTENCE_ERROR"
