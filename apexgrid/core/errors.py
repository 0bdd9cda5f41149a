"""
➡️ But : Taxonomie des erreurs métier, indépendante du web.

Les services lèvent ces exceptions ; la couche de présentation
(apexgrid.api.v1.pages) les traduit en messages et en codes HTTP.
"""

from typing import Iterable, List


class ApexGridError(Exception):
    """Racine de toutes les erreurs applicatives."""


class ValidationError(ApexGridError):
    """Entrée invalide : aucune écriture n'a été faite."""

    def __init__(self, messages: Iterable[str]):
        self.messages: List[str] = list(messages)
        super().__init__("; ".join(self.messages))


class AuthError(ApexGridError):
    pass


class InvalidCredentials(AuthError):
    # Message volontairement générique : ne pas révéler quel champ est faux
    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message)


class ReferentialIntegrityError(ApexGridError):
    """Suppression bloquée par des lignes dépendantes (RESTRICT)."""


class StoreUnavailableError(ApexGridError):
    """Schéma absent ou connexion impossible."""
