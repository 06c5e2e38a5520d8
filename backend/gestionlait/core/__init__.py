"""
gestionlait.core

Package “cœur” de l’application : tout ce qui est transversal et ne dépend pas d’un domaine
métier précis (livreurs, livraisons, versements).

- settings
  Configuration (variables d’environnement, fichier de données, identifiants, durées).

- errors
  Format d’erreur API uniforme + hiérarchie d’exceptions métier
  (ValidationError, ConflictError, NotFoundError, AuthenticationError, PersistenceError).

- logging
  Logs JSON (1 ligne par événement) enrichis du request_id.

- request_id
  Identifiant de corrélation par requête (header X-Request-Id).

- security
  Garde d’accès : vérification de la session (cookie) sur les routes protégées.

- ids
  Générateurs d’identifiants (UUID par défaut, compteur pour les tests).
"""
