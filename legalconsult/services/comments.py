"""Comments on document nodes.

A comment may only be added when the document owning the node is open
for commenting.  The owning document is found by walking up to the root
node, which is the node a ``DocumentConsolidated`` points at.
"""
from __future__ import annotations

from uuid import UUID

from legalconsult.core.exceptions import LegalValidationError, NotFoundError
from legalconsult.db.models import Comment, DocumentConsolidated, DocumentNode
from legalconsult.db.repositories import (
    CommentRepository,
    DocumentConsolidatedRepository,
    DocumentNodeRepository,
    UserRepository,
)


class CommentService:
    def __init__(
        self,
        comments: CommentRepository,
        nodes: DocumentNodeRepository,
        documents: DocumentConsolidatedRepository,
        users: UserRepository,
    ) -> None:
        self.comments = comments
        self.nodes = nodes
        self.documents = documents
        self.users = users

    def _get_node(self, node_id: UUID) -> DocumentNode:
        node = self.nodes.find_by_id(node_id)
        if node is None:
            raise NotFoundError("DocumentNode", node_id)
        return node

    def _owning_document(self, node: DocumentNode) -> DocumentConsolidated | None:
        root = node
        while root.parent is not None:
            root = root.parent
        return self.documents.find_by_document_node_id(root.id)

    def create(self, node_id: UUID, user_id: UUID, text: str) -> Comment:
        """Add a comment to *node_id* on behalf of *user_id*."""
        if not text or not text.strip():
            raise LegalValidationError("comment.Text.empty")

        node = self._get_node(node_id)
        document = self._owning_document(node)
        if document is None or not document.document_configuration.open_for_commenting:
            raise LegalValidationError("comment.Document.closed")
        if self.users.find_by_id(user_id) is None:
            raise NotFoundError("User", user_id)

        return self.comments.create(
            document_node_id=node.id,
            user_id=user_id,
            text=text.strip(),
            status="PENDING",
        )

    def find_by_node(self, node_id: UUID, limit: int = 50, offset: int = 0) -> list[Comment]:
        self._get_node(node_id)
        return self.comments.find_by_node(node_id, limit=limit, offset=offset)

    def delete_by_id(self, comment_id: UUID) -> None:
        self.comments.delete_by_id(comment_id)
