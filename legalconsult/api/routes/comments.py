"""Comment routes."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from legalconsult.api.deps import get_comment_service
from legalconsult.api.serializers import serialize_comment
from legalconsult.services.comments import CommentService

router = APIRouter(tags=["comments"])


class CommentBody(BaseModel):
    user_id: UUID
    text: str


@router.post("/nodes/{node_id}/comments", status_code=201, summary="Comment on a document node")
def create_comment(
    node_id: UUID,
    body: CommentBody,
    service: CommentService = Depends(get_comment_service),
):
    return serialize_comment(service.create(node_id, body.user_id, body.text))


@router.get("/nodes/{node_id}/comments", summary="List comments on a document node")
def list_comments(
    node_id: UUID,
    limit: int = 50,
    offset: int = 0,
    service: CommentService = Depends(get_comment_service),
):
    return [serialize_comment(c) for c in service.find_by_node(node_id, limit=limit, offset=offset)]


@router.delete("/comments/{comment_id}", status_code=204, summary="Delete a comment")
def delete_comment(comment_id: UUID, service: CommentService = Depends(get_comment_service)):
    service.delete_by_id(comment_id)
    return Response(status_code=204)
