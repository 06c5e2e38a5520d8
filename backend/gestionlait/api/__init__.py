"""
gestionlait.api

Routes FastAPI regroupées par domaine (auth, livreurs, livraisons, versements, statistiques).
Toutes les routes métier sont protégées par la dépendance de session (deps.AuthDep).
"""
