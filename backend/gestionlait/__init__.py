"""
gestionlait

Package racine du backend de gestion des livreurs de lait.

Rôle (fonctionnel) :
- Suivi des livreurs, de leurs livraisons journalières et de leurs versements.
- Statistiques mensuelles (par livreur, solde, classement).

Organisation (haute-level) :
- gestionlait.api      : routes FastAPI (contrats HTTP, dépendances, garde de session)
- gestionlait.core     : briques transverses (settings, errors, logs, request_id, sécurité, ids)
- gestionlait.db       : Store en mémoire + persistance snapshot JSON
- gestionlait.models   : entités persistées (livreur, livraison, versement, snapshot)
- gestionlait.schemas  : schémas Pydantic (entrées/sorties API)
- gestionlait.services : logique métier (enregistrements, statistiques, sessions)
"""
