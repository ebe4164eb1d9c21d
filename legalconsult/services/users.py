"""User invitations.

Creates (or reuses) users by email and sends each one the registration
email.  Users are flushed before any mail goes out, so a delivery failure
leaves them in place for the caller to commit.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from legalconsult.core.exceptions import NotFoundError
from legalconsult.db.models import User
from legalconsult.db.repositories import UserRepository
from legalconsult.notification.dispatcher import NotificationDispatcher, Recipient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Invitation:
    email: str
    first_name: str | None = None
    last_name: str | None = None


class UserService:
    def __init__(self, users: UserRepository, dispatcher: NotificationDispatcher) -> None:
        self.users = users
        self.dispatcher = dispatcher

    def get(self, user_id: UUID) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def invite(self, invitations: Iterable[Invitation]) -> list[User]:
        """Create missing users and send them all the registration email.

        Raises ``DeliveryFailedError`` when any email fails; the users are
        already flushed at that point.
        """
        invited: list[User] = []
        seen: set[str] = set()
        for invitation in invitations:
            email = invitation.email.strip().lower()
            if email in seen:
                continue
            seen.add(email)

            user = self.users.find_by_email(email)
            if user is None:
                user = self.users.create(
                    email=email,
                    first_name=invitation.first_name,
                    last_name=invitation.last_name,
                )
                logger.info("Created user %s", user.id)
            invited.append(user)

        self.dispatcher.send_registration_notifications([Recipient.from_user(user) for user in invited])
        return invited
