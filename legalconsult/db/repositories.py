from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from legalconsult.core.exceptions import NotFoundError
from legalconsult.db import models

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    """CRUD helpers over one mapped model.  Flushes, never commits."""

    model: type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def create(self, **kwargs) -> ModelT:
        entity = self.model(**kwargs)
        return self.save(entity)

    def find_by_id(self, entity_id: UUID) -> ModelT | None:
        return self.db.get(self.model, entity_id)

    def find_all(self) -> list[ModelT]:
        stmt = select(self.model)
        return list(self.db.execute(stmt).scalars().all())

    def save(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.flush()
        return entity

    def delete_by_id(self, entity_id: UUID) -> None:
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.model.__name__, entity_id)
        self.db.delete(entity)
        self.db.flush()


class UserRepository(BaseRepository[models.User]):
    model = models.User

    def find_by_email(self, email: str) -> models.User | None:
        stmt = select(models.User).where(models.User.email == email)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_ids(self, user_ids: Iterable[UUID]) -> list[models.User]:
        user_ids = list(user_ids)
        if not user_ids:
            return []
        stmt = select(models.User).where(models.User.id.in_(user_ids))
        return list(self.db.execute(stmt).scalars().all())


class DocumentNodeRepository(BaseRepository[models.DocumentNode]):
    model = models.DocumentNode


class DocumentConsolidatedRepository(BaseRepository[models.DocumentConsolidated]):
    model = models.DocumentConsolidated

    def find_by_document_metadata_id(self, metadata_id: UUID) -> models.DocumentConsolidated | None:
        stmt = select(models.DocumentConsolidated).where(
            models.DocumentConsolidated.document_metadata_id == metadata_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_document_node_id(self, node_id: UUID) -> models.DocumentConsolidated | None:
        stmt = select(models.DocumentConsolidated).where(
            models.DocumentConsolidated.document_node_id == node_id
        )
        return self.db.execute(stmt).scalar_one_or_none()


class CommentRepository(BaseRepository[models.Comment]):
    model = models.Comment

    def find_by_node(self, node_id: UUID, limit: int = 50, offset: int = 0) -> list[models.Comment]:
        stmt = (
            select(models.Comment)
            .where(models.Comment.document_node_id == node_id)
            .order_by(models.Comment.created_at, models.Comment.id)
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())
