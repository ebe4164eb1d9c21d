"""User routes: lookup and invitations."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from legalconsult.api.deps import get_db, get_user_service
from legalconsult.api.serializers import serialize_user
from legalconsult.core.exceptions import DeliveryFailedError
from legalconsult.services.users import Invitation, UserService

router = APIRouter(prefix="/users", tags=["users"])


class InvitationBody(BaseModel):
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    first_name: str | None = None
    last_name: str | None = None


class InviteBody(BaseModel):
    users: list[InvitationBody]


@router.post("/invitations", status_code=201, summary="Create users and send registration emails")
def invite_users(
    body: InviteBody,
    db: Session = Depends(get_db),
    service: UserService = Depends(get_user_service),
):
    invitations = [Invitation(u.email, u.first_name, u.last_name) for u in body.users]
    try:
        users = service.invite(invitations)
    except DeliveryFailedError:
        # Keep the created users; the client can re-send the invitations.
        db.commit()
        raise
    return [serialize_user(user) for user in users]


@router.get("/{user_id}", summary="Get a user")
def get_user(user_id: UUID, service: UserService = Depends(get_user_service)):
    return serialize_user(service.get(user_id))
