from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

"""
Model Worker (livreur).

Champs :
- id : identifiant opaque.
- name (nom) : nom affiché, unique sans tenir compte de la casse ni des espaces autour.
- created_at (date_ajout) : horodatage ISO-8601 UTC.

Cycle de vie :
- La suppression d’un livreur entraîne celle de toutes ses livraisons et de tous ses versements.
"""


class Worker(BaseModel):
    id: str
    name: str = Field(alias="nom")
    created_at: str = Field(alias="date_ajout")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def name_key(self) -> str:
        """Clé de comparaison pour l’unicité du nom."""
        return normalize_name(self.name)


def normalize_name(value: str) -> str:
    return value.strip().casefold()
