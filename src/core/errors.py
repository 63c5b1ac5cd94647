"""
Erreurs du modèle membre.

Une seule famille d'erreur : un argument obligatoire absent ou invalide.
Levée de manière synchrone (construction, renommage, résolution de rôle).
"""
from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Argument obligatoire absent (ou valeur inconnue).

    Attributs :
        field : nom du champ fautif
    """

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"{field} ne peut pas être None")


__all__ = ["InvalidArgumentError"]
