from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from gestionlait.api.router import api_router
from gestionlait.core.errors import AppError, error_payload
from gestionlait.core.logging import setup_logging
from gestionlait.core.request_id import REQUEST_ID_HEADER, ensure_request_id, request_id_for, set_request_id
from gestionlait.core.settings import Settings, settings
from gestionlait.db import JsonFileBackend, PersistenceBackend, Store
from gestionlait.services.records import RecordService
from gestionlait.services.sessions import SessionStore
from gestionlait.services.statistics import StatisticsService

"""
Application FastAPI (entrypoint).

Rôle (fonctionnel) :
- Construit l’application (settings, CORS, middlewares, routers) via create_app().
- Cycle de vie (lifespan) :
  - chargement du snapshot JSON au démarrage,
  - sauvegarde automatique périodique (AUTOSAVE_INTERVAL_SECONDS),
  - sauvegarde finale à l’arrêt.
- Observabilité : request_id propagé (X-Request-Id), logs JSON (timing, status, client_ip),
  seuil de “slow request”.
- Uniformise les erreurs côté client (format error_payload) :
  400 validation, 401 non authentifié, 404 introuvable, 409 conflit, 500 sinon.

Ce fichier ne contient pas de logique métier :
- La logique métier est dans gestionlait.services
- Les routes sont dans gestionlait.api
- La persistance est dans gestionlait.db
"""


class UTF8JSONResponse(JSONResponse):
    """Réponse JSON avec charset UTF-8 explicite (cohérent sur tous les endpoints)."""
    media_type = "application/json; charset=utf-8"


setup_logging(settings.LOG_LEVEL)

# logger principal projet
log = logging.getLogger("gestionlait")

# logger dédié observabilité HTTP (séparé du métier)
http_log = logging.getLogger("gestionlait.http")


def _split_origins(value: str) -> list[str]:
    """Parse une liste d’origines CORS depuis une string 'a,b,c'."""
    if not value:
        return []
    return [o.strip() for o in value.split(",") if o.strip()]


def _save_and_count(store: Store) -> tuple[bool, dict[str, int]]:
    # Exécuté dans le pool de threads : le verrou du Store n’est jamais pris sur la boucle asyncio
    return store.save(), store.counts()


async def _autosave_loop(store: Store, interval: float) -> None:
    """Filet de sécurité : réécrit le snapshot à intervalle fixe, sans jamais interrompre l’app."""
    while True:
        await asyncio.sleep(interval)
        try:
            ok, counts = await run_in_threadpool(_save_and_count, store)
            if ok:
                log.info("Sauvegarde automatique effectuée", extra={"counts": counts})
        except Exception:
            log.exception("Sauvegarde automatique en échec")


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: Store = app.state.store
    app_settings: Settings = app.state.settings

    snap = store.load()
    log.info(
        "Serveur démarré",
        extra={"counts": snap.counts(), "data_file": str(getattr(store.backend, "path", "-"))},
    )

    task: Optional[asyncio.Task] = None
    if app_settings.AUTOSAVE_INTERVAL_SECONDS > 0:
        task = asyncio.create_task(_autosave_loop(store, app_settings.AUTOSAVE_INTERVAL_SECONDS))

    try:
        yield
    finally:
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        log.info("Sauvegarde finale...")
        if store.save():
            log.info("Base de données sauvegardée")


def create_app(
    app_settings: Optional[Settings] = None,
    *,
    backend: Optional[PersistenceBackend] = None,
    records: Optional[RecordService] = None,
    sessions: Optional[SessionStore] = None,
) -> FastAPI:
    """
    Construit l’application.

    Les dépendances sont injectables (tests) : backend mémoire, RecordService avec ids/horloge
    déterministes, SessionStore avec horloge contrôlée.
    """
    cfg = app_settings or settings

    if records is not None:
        store = records.store
    else:
        store = Store(backend or JsonFileBackend(cfg.DATA_FILE))
        records = RecordService(store, unit_price=cfg.UNIT_PRICE)

    app = FastAPI(
        title=cfg.APP_NAME,
        debug=cfg.DEBUG,
        default_response_class=UTF8JSONResponse,
        lifespan=lifespan,
    )

    app.state.settings = cfg
    app.state.store = store
    app.state.records = records
    app.state.statistics = StatisticsService(store)
    app.state.sessions = sessions or SessionStore(ttl=timedelta(hours=cfg.SESSION_TTL_HOURS))

    default_dev_origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Cookies de session => allow_credentials
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_split_origins(cfg.CORS_ORIGINS) or default_dev_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", REQUEST_ID_HEADER],
    )

    app.include_router(api_router)

    slow_ms = cfg.SLOW_REQUEST_MS

    # --- Middleware observabilité : request_id + timing + logs structurés ---
    @app.middleware("http")
    async def request_observability(request: Request, call_next):
        rid = ensure_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid

        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)

            level = logging.WARNING if duration_ms >= slow_ms else logging.INFO
            http_log.log(
                level,
                "request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": getattr(response, "status_code", None),
                    "duration_ms": duration_ms,
                    "client_ip": request.client.host if request.client else None,
                },
            )
            set_request_id(None)

    # --- Error handlers : format standard, pas de stacktrace côté client ---
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        """Erreurs métier (services) -> status + payload standard."""
        return UTF8JSONResponse(
            status_code=exc.status,
            content=error_payload(
                code=exc.code,
                message=exc.message,
                status=exc.status,
                request_id=request_id_for(request),
                details=exc.details,
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Erreurs HTTP natives (404 route inconnue, 405…) -> payload standard."""
        code = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
        return UTF8JSONResponse(
            status_code=exc.status_code,
            content=error_payload(
                code=code,
                message=str(exc.detail),
                status=exc.status_code,
                request_id=request_id_for(request),
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Entrée mal formée (body / path) -> 400 + details=exc.errors()."""
        return UTF8JSONResponse(
            status_code=400,
            content=error_payload(
                code="VALIDATION_ERROR",
                message="Requête invalide",
                status=400,
                request_id=request_id_for(request),
                details=[{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()],
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        """Fallback : toute exception non gérée -> 500 + log serveur."""
        log.exception("Unhandled error: %s", exc)
        return UTF8JSONResponse(
            status_code=500,
            content=error_payload(
                code="INTERNAL_ERROR",
                message="Erreur interne du serveur",
                status=500,
                request_id=request_id_for(request),
            ),
        )

    return app


app = create_app()


def run() -> None:
    """Point d’entrée console : `gestionlait`."""
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)
