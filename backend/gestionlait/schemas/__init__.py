"""
gestionlait.schemas

Package des schémas API (Pydantic).

Rôle (fonctionnel) :
- Définit les modèles d’entrée/sortie utilisés par l’API (request/response).
- Sépare clairement :
  - les entités persistées (gestionlait.models) = snapshot JSON
  - les schémas (gestionlait.schemas) = contrat HTTP / agrégats calculés
"""
