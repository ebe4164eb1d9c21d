"""Assign users to a consolidated document and notify them."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from uuid import UUID

from legalconsult.core.exceptions import NotFoundError
from legalconsult.db.models import DocumentConsolidated, User
from legalconsult.db.repositories import DocumentConsolidatedRepository, UserRepository
from legalconsult.notification.dispatcher import NotificationDispatcher, Recipient

logger = logging.getLogger(__name__)


class DocumentAssignmentService:
    def __init__(
        self,
        documents: DocumentConsolidatedRepository,
        users: UserRepository,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self.documents = documents
        self.users = users
        self.dispatcher = dispatcher

    def _get_document(self, metadata_id: UUID) -> DocumentConsolidated:
        document = self.documents.find_by_document_metadata_id(metadata_id)
        if document is None:
            raise NotFoundError("DocumentConsolidated", metadata_id)
        return document

    def assigned_users(self, metadata_id: UUID) -> list[User]:
        return list(self._get_document(metadata_id).assigned_users)

    def assign_users(self, metadata_id: UUID, user_ids: Iterable[UUID]) -> list[User]:
        """Assign *user_ids* to the document and email the newly assigned ones.

        Users already assigned are left alone and not emailed again.
        Raises ``NotFoundError`` for an unknown document or user, and
        ``DeliveryFailedError`` after the assignments are flushed if any
        email fails.
        """
        document = self._get_document(metadata_id)
        user_ids = list(dict.fromkeys(user_ids))
        users = {user.id: user for user in self.users.find_by_ids(user_ids)}
        for user_id in user_ids:
            if user_id not in users:
                raise NotFoundError("User", user_id)

        already_assigned = {user.id for user in document.assigned_users}
        added = [users[user_id] for user_id in user_ids if user_id not in already_assigned]
        if not added:
            return []

        document.assigned_users.extend(added)
        self.documents.save(document)
        logger.info("Assigned %d users to document %s", len(added), metadata_id)

        self.dispatcher.send_document_assigned_notifications(
            document.document_metadata,
            [Recipient.from_user(user) for user in added],
        )
        return added
