from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

"""
Schemas Auth (Pydantic).

Rôle (fonctionnel) :
- Payload de login (identifiant + mot de passe partagés).
- Réponses login / état de session (sans jamais exposer le token : il voyage dans le cookie).
"""


class LoginRequest(BaseModel):
    username: str = Field(default="", max_length=200)
    password: str = Field(default="", max_length=200)

    model_config = ConfigDict(extra="ignore")


class SessionOut(BaseModel):
    authenticated: bool
    expires_at: Optional[datetime] = None
