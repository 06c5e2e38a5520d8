from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

"""
Core Settings.

Rôle (fonctionnel) :
- Centralise la configuration de l’application via variables d’environnement (Pydantic Settings).
- Charge un fichier .env (par défaut backend/.env) pour faciliter le dev/local.
- Fournit un objet global `settings` importable dans tout le projet.

Organisation :
- App : nom, env, debug, niveau de log.
- CORS : origines autorisées (front).
- Stockage : fichier JSON + intervalle de sauvegarde automatique.
- Métier : prix unitaire d’une livraison.
- Auth : identifiants partagés + durée de vie des sessions.
"""

# Pointe toujours vers backend/ (racine backend/)
BACKEND_DIR = Path(__file__).resolve().parents[2]
ENV_PATH = BACKEND_DIR / ".env"  # backend/.env


class Settings(BaseSettings):
    # --- App ---
    APP_NAME: str = "Gestion Lait API"
    ENV: str = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    SLOW_REQUEST_MS: int = 800
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # --- CORS ---
    # Liste CSV des origines autorisées (front)
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    # --- Stockage ---
    # Snapshot JSON complet (réécrit à chaque mutation)
    DATA_FILE: str = str(BACKEND_DIR / "database.json")
    AUTOSAVE_INTERVAL_SECONDS: int = 300

    # --- Métier ---
    # Prix fixé à la création / mise à jour d’une livraison
    UNIT_PRICE: float = 75.0

    # --- Auth ---
    # AUTH_ENABLED=false : variante non sécurisée (aucune session exigée)
    AUTH_ENABLED: bool = True
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = ""
    SESSION_TTL_HOURS: int = 24
    SESSION_COOKIE_NAME: str = "gestionlait_session"
    SESSION_COOKIE_SECURE: bool = False

    # Config Pydantic Settings
    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Instance globale importable
settings = Settings()
