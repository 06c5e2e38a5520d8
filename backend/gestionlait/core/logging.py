from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

from .request_id import get_request_id

"""
Journalisation JSON de gestionlait.

Une ligne = un objet JSON : horodatage UTC, niveau, logger, request_id, message,
puis les champs métier passés en `extra=` (livreur, enregistrement, compteurs du store…).
Les loggers uvicorn partagent le handler racine pour garder un flux unique.
"""

# Champs `extra=` recopiés tels quels dans la ligne JSON
LOG_FIELDS = frozenset(
    {
        # observabilité HTTP
        "method",
        "path",
        "status_code",
        "duration_ms",
        "client_ip",
        # métier
        "worker_id",
        "record_id",
        "counts",
        "data_file",
    }
)

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


def _base_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
        "level": record.levelname,
        "logger": record.name,
        "request_id": getattr(record, "request_id", "-"),
        "msg": record.getMessage(),
    }


class JsonFormatter(logging.Formatter):
    """Sérialise un LogRecord ; les valeurs non JSON (Path, datetime…) passent par str()."""

    def format(self, record: logging.LogRecord) -> str:
        line = _base_fields(record)
        line.update({k: v for k, v in vars(record).items() if k in LOG_FIELDS})
        if record.exc_info:
            line["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> logging.Handler:
    """Remplace les handlers du logger racine par un handler JSON unique et le renvoie.

    Rappelable sans doublon (rechargement uvicorn, tests).
    """
    lvl = level.upper()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(lvl)

    for name in _UVICORN_LOGGERS:
        uv = logging.getLogger(name)
        uv.handlers = [handler]
        uv.propagate = False
        uv.setLevel(lvl)

    return handler
