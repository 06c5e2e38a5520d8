"""
gestionlait.services

Package “services” : logique applicative (use-cases) indépendante des endpoints HTTP.

Rôle (fonctionnel) :
- records    : mutations (livreurs, livraisons en upsert, versements, remise à zéro).
- statistics : agrégats mensuels purs (stats, solde, listes globales, classement).
- sessions   : sessions serveur de la variante sécurisée.

Principe :
- gestionlait.api = transport HTTP (routes, validation, dépendances)
- gestionlait.services = orchestration métier (réutilisable, testable)
- gestionlait.db / gestionlait.models = persistance et entités
"""
