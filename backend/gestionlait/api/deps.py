from __future__ import annotations

from fastapi import Depends, Request

from gestionlait.core.security import require_session
from gestionlait.services.records import RecordService
from gestionlait.services.statistics import StatisticsService

"""
Dépendances API.

Rôle (fonctionnel) :
- Centralise les dépendances réutilisables sur les routes.
- Les services vivent dans app.state (créés par create_app) : les tests peuvent injecter
  un Store sur backend mémoire sans toucher aux routes.
"""


def get_records(request: Request) -> RecordService:
    return request.app.state.records


def get_statistics(request: Request) -> StatisticsService:
    return request.app.state.statistics


# Dépendance prête à l’emploi pour protéger un routeur
AuthDep = Depends(require_session)
