"""
➡️ But : Table des comptes (Credential Store).

Un utilisateur est créé à l'inscription et lu à la connexion ;
l'application ne le modifie ni ne le supprime jamais.
"""

from sqlmodel import Field

from .base import BaseModelDB

class User(BaseModelDB, table=True):
    __tablename__ = "users"

    name: str = Field(max_length=100)
    email: str = Field(index=True, unique=True, max_length=190)
    password_hash: str = Field(max_length=255)
