from fastapi import APIRouter

from .health import router as health_router

from gestionlait.api.auth import router as auth_router
from gestionlait.api.workers import router as workers_router
from gestionlait.api.deliveries import router as deliveries_router
from gestionlait.api.deposits import router as deposits_router
from gestionlait.api.stats import router as stats_router

"""
Router principal de l’API.

Rôle (fonctionnel) :
- Regroupe les routeurs par domaine (health, auth, livreurs, livraisons, versements, statistiques).
- Sert de point d’entrée unique pour l’inclusion dans l’application FastAPI.
"""

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router)
api_router.include_router(workers_router)
api_router.include_router(deliveries_router)
api_router.include_router(deposits_router)
api_router.include_router(stats_router)
