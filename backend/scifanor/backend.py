"""Backend client used by the catalog view model.

All persistence, storage and identity access goes through ``CatalogBackend``.
Rows travel as plain dicts keyed by column name, so the view-model layer never
touches ORM objects. Writes are checked against row-level policies here, so a
write is rejected even when the calling page forgot to hide the action.
"""
import logging
from typing import Any, Iterable, Optional

from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from scifanor.errors import CatalogError, Conflict, NotFound, PermissionDenied, TransientIOError, ValidationError
from scifanor.models import Plant, PlantActivityLog, PlantCollaborator, Profile, User
from scifanor.storage import ObjectStorage

logger = logging.getLogger(__name__)

COLLECTIONS = {
    "plants": Plant,
    "profiles": Profile,
    "plant_collaborators": PlantCollaborator,
    "plant_activity_logs": PlantActivityLog,
}


def _model_for(collection: str):
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValidationError(f"Unknown collection '{collection}'") from None


def _column_keys(model) -> dict[str, str]:
    """Map database column names to mapped attribute keys ("class" -> "class_")."""
    return {
        attr.columns[0].name: attr.key
        for attr in inspect(model).mapper.column_attrs
    }


def _is_unique_violation(exc: IntegrityError) -> bool:
    """True for duplicate-key failures on Postgres (SQLSTATE 23505) or SQLite."""
    if getattr(exc.orig, "pgcode", None) == "23505":
        return True
    return "UNIQUE constraint failed" in str(exc.orig)


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def row_to_dict(entity: Any) -> dict:
    """Convert an SQLAlchemy entity to a dict keyed by column name."""
    keys = _column_keys(type(entity))
    return {name: getattr(entity, key) for name, key in keys.items()}


class CatalogBackend:
    """Database, storage and identity access for a single request."""

    def __init__(self, db: Session, storage: Optional[ObjectStorage] = None, user: Optional[User] = None):
        self.db = db
        self.storage = storage
        self.user = user

    # ── Identity ──────────────────────────────────────────────
    def current_identity(self) -> Optional[dict]:
        if self.user is None:
            return None
        return {"id": self.user.id, "email": self.user.email}

    def _require_identity(self) -> dict:
        identity = self.current_identity()
        if identity is None:
            raise PermissionDenied("Login required")
        return identity

    def _is_admin(self, user_id: str) -> bool:
        profile = self.db.get(Profile, user_id)
        return bool(profile and profile.is_admin)

    # ── Reads ─────────────────────────────────────────────────
    def _attr(self, model, field: str):
        keys = _column_keys(model)
        if field not in keys:
            raise ValidationError(f"Unknown field '{field}' on {model.__tablename__}")
        return getattr(model, keys[field])

    def _ordered(self, model, query, order_by: Optional[str]):
        if not order_by:
            return query
        descending = order_by.startswith("-")
        column = self._attr(model, order_by.lstrip("-"))
        return query.order_by(column.desc() if descending else column.asc())

    def fetch_all(self, collection: str, order_by: Optional[str] = None) -> list[dict]:
        model = _model_for(collection)
        try:
            rows = self._ordered(model, self.db.query(model), order_by).all()
        except SQLAlchemyError as exc:
            raise TransientIOError(f"Failed to fetch {collection}") from exc
        return [row_to_dict(row) for row in rows]

    def fetch_by_id(self, collection: str, entity_id: str) -> dict:
        model = _model_for(collection)
        try:
            entity = self.db.get(model, entity_id)
        except SQLAlchemyError as exc:
            raise TransientIOError(f"Failed to fetch {collection}/{entity_id}") from exc
        if entity is None:
            raise NotFound(f"{collection} '{entity_id}' not found")
        return row_to_dict(entity)

    def fetch_where(
        self,
        collection: str,
        field: str,
        match_set: Iterable[Any],
        order_by: Optional[str] = None,
    ) -> list[dict]:
        model = _model_for(collection)
        values = list(match_set)
        if not values:
            return []
        query = self.db.query(model).filter(self._attr(model, field).in_(values))
        try:
            rows = self._ordered(model, query, order_by).all()
        except SQLAlchemyError as exc:
            raise TransientIOError(f"Failed to fetch {collection} by {field}") from exc
        return [row_to_dict(row) for row in rows]

    def search(self, collection: str, field: str, text: str, limit: int = 10) -> list[dict]:
        """Case-insensitive contains-match on a text column."""
        model = _model_for(collection)
        column = self._attr(model, field)
        try:
            rows = (
                self.db.query(model)
                .filter(column.ilike(_like_pattern(text), escape="\\"))
                .order_by(column.asc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as exc:
            raise TransientIOError(f"Failed to search {collection}") from exc
        return [row_to_dict(row) for row in rows]

    # ── Writes ────────────────────────────────────────────────
    def _commit(self, what: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if _is_unique_violation(exc):
                raise Conflict(f"{what} violates a unique constraint") from exc
            raise ValidationError(f"{what} violates a data constraint") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise TransientIOError(f"{what} failed") from exc

    def insert(self, collection: str, row: dict) -> dict:
        model = _model_for(collection)
        self._check_insert(collection, row)
        keys = _column_keys(model)
        unknown = set(row) - set(keys)
        if unknown:
            raise ValidationError(f"Unknown fields for {collection}: {sorted(unknown)}")

        entity = model(**{keys[name]: value for name, value in row.items()})
        self.db.add(entity)
        self._commit(f"Insert into {collection}")
        self.db.refresh(entity)
        return row_to_dict(entity)

    def update(self, collection: str, entity_id: str, patch: dict) -> dict:
        model = _model_for(collection)
        entity = self.db.get(model, entity_id)
        if entity is None:
            raise NotFound(f"{collection} '{entity_id}' not found")
        self._check_update(collection, entity)

        keys = _column_keys(model)
        rejected = [name for name in patch if name == "id" or name not in keys]
        if rejected:
            raise ValidationError(f"Field '{rejected[0]}' cannot be updated on {collection}")
        for name, value in patch.items():
            setattr(entity, keys[name], value)
        self._commit(f"Update of {collection}/{entity_id}")
        self.db.refresh(entity)
        return row_to_dict(entity)

    def delete(self, collection: str, entity_id: str) -> None:
        model = _model_for(collection)
        entity = self.db.get(model, entity_id)
        if entity is None:
            raise NotFound(f"{collection} '{entity_id}' not found")
        self._check_delete(collection, entity)
        self.db.delete(entity)
        self._commit(f"Delete of {collection}/{entity_id}")

    def delete_where(self, collection: str, **filters: Any) -> int:
        model = _model_for(collection)
        self._require_identity()
        query = self.db.query(model)
        for field, value in filters.items():
            query = query.filter(self._attr(model, field) == value)
        entities = query.all()
        try:
            for entity in entities:
                self._check_delete(collection, entity)
                self.db.delete(entity)
        except CatalogError:
            self.db.rollback()
            raise
        self._commit(f"Delete from {collection}")
        return len(entities)

    # ── Storage ───────────────────────────────────────────────
    def upload_file(self, bucket: str, path: str, blob: bytes, content_type: str) -> str:
        self._require_identity()
        if self.storage is None:
            raise TransientIOError("Object storage is not configured")
        return self.storage.upload_bytes(bucket, path, blob, content_type)

    # ── Row-level policies ────────────────────────────────────
    def _plant_owner_or_admin(self, plant_id: str, user_id: str) -> bool:
        plant = self.db.get(Plant, plant_id)
        if plant is None:
            raise NotFound(f"plants '{plant_id}' not found")
        return plant.created_by == user_id or self._is_admin(user_id)

    def _is_collaborator(self, plant_id: str, user_id: str) -> bool:
        return (
            self.db.query(PlantCollaborator)
            .filter(PlantCollaborator.plant_id == plant_id, PlantCollaborator.user_id == user_id)
            .first()
            is not None
        )

    def _check_insert(self, collection: str, row: dict) -> None:
        user_id = self._require_identity()["id"]
        if collection == "plant_collaborators":
            if not self._plant_owner_or_admin(row.get("plant_id"), user_id):
                raise PermissionDenied("Only the plant's creator or an admin can manage collaborators")
        elif collection == "plant_activity_logs":
            if row.get("user_id") != user_id:
                raise PermissionDenied("Activity can only be logged as yourself")
        elif collection == "profiles":
            if row.get("id") != user_id and not self._is_admin(user_id):
                raise PermissionDenied("Cannot create a profile for another user")

    def _check_update(self, collection: str, entity: Any) -> None:
        user_id = self._require_identity()["id"]
        if collection == "plants":
            allowed = (
                entity.created_by == user_id
                or self._is_collaborator(entity.id, user_id)
                or self._is_admin(user_id)
            )
            if not allowed:
                raise PermissionDenied("Only the creator, collaborators or an admin can edit this plant")
        elif collection == "profiles":
            if entity.id != user_id and not self._is_admin(user_id):
                raise PermissionDenied("Cannot edit another user's profile")
        elif collection == "plant_activity_logs":
            raise PermissionDenied("Activity log entries are immutable")
        elif collection == "plant_collaborators":
            raise PermissionDenied("Collaborator links cannot be edited")

    def _check_delete(self, collection: str, entity: Any) -> None:
        user_id = self._require_identity()["id"]
        if collection == "plants":
            if entity.created_by != user_id and not self._is_admin(user_id):
                raise PermissionDenied("Only the creator or an admin can delete this plant")
        elif collection == "plant_collaborators":
            if not self._plant_owner_or_admin(entity.plant_id, user_id):
                raise PermissionDenied("Only the plant's creator or an admin can manage collaborators")
        elif collection == "profiles":
            if not self._is_admin(user_id):
                raise PermissionDenied("Only an admin can delete profiles")
        elif collection == "plant_activity_logs":
            raise PermissionDenied("Activity log entries are immutable")
