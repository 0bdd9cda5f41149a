from typing import Any, Generic, Optional, Type, TypeVar
from sqlmodel import SQLModel, Session, select, func

from apexgrid.db.session import store_errors

# Type générique pour le modèle (Team, Car, CarStats, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : create, read, update, delete, count.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    👉 commit=False permet au service d'enchaîner plusieurs écritures
       dans une seule transaction (ex : voiture + ligne de stats).
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    def guard(self):
        """Context manager : erreurs "base pas prête" -> StoreUnavailableError."""
        return store_errors(self.session)

    # ---------- READ ----------

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    def count(self) -> int:
        """Retourne le nombre total d'enregistrements."""
        return self.session.exec(select(func.count()).select_from(self.model)).one()

    # ---------- CREATE ----------

    def create(self, *, commit: bool = True, **fields) -> ModelT:
        """Crée et persiste un nouvel enregistrement."""
        entity = self.model(**fields)
        self.session.add(entity)
        if commit:
            self.session.commit()
            self.session.refresh(entity)
        else:
            # flush pour obtenir l'ID sans commit (utile pour FKs)
            self.session.flush()
        return entity

    # ---------- UPDATE ----------

    def update(self, entity: ModelT, *, commit: bool = True, **changes) -> ModelT:
        """Met à jour un enregistrement existant."""
        for key, value in changes.items():
            setattr(entity, key, value)
        self.session.add(entity)
        if commit:
            self.session.commit()
            self.session.refresh(entity)
        else:
            self.session.flush()
        return entity

    # ---------- DELETE ----------

    def delete(self, entity: ModelT, *, commit: bool = True) -> None:
        """Supprime un enregistrement."""
        self.session.delete(entity)
        if commit:
            self.session.commit()
        else:
            self.session.flush()

    # ---------- TRANSACTION ----------

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
