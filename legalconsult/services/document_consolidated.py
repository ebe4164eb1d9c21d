"""Consolidated documents: metadata, root node and configuration as one aggregate.

Thin layer over ``DocumentConsolidatedRepository``; the only behaviour it
adds is turning an empty metadata-id lookup into ``NotFoundError``.
"""
from __future__ import annotations

from uuid import UUID

from legalconsult.core.exceptions import NotFoundError
from legalconsult.db.models import DocumentConsolidated
from legalconsult.db.repositories import DocumentConsolidatedRepository


class DocumentConsolidatedService:
    def __init__(self, repository: DocumentConsolidatedRepository) -> None:
        self.repository = repository

    def get_by_document_metadata_id(self, metadata_id: UUID) -> DocumentConsolidated:
        document = self.repository.find_by_document_metadata_id(metadata_id)
        if document is None:
            raise NotFoundError("DocumentConsolidated", metadata_id)
        return document

    def find_all(self) -> list[DocumentConsolidated]:
        return self.repository.find_all()

    def save_one(self, document: DocumentConsolidated) -> DocumentConsolidated:
        return self.repository.save(document)

    def delete_by_id(self, document_id: UUID) -> None:
        self.repository.delete_by_id(document_id)
