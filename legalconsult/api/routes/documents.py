"""Consolidated document routes and user assignments."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from legalconsult.api.deps import get_assignment_service, get_db, get_document_service
from legalconsult.api.serializers import serialize_document, serialize_user
from legalconsult.core.exceptions import DeliveryFailedError
from legalconsult.services.document_assignment import DocumentAssignmentService
from legalconsult.services.document_consolidated import DocumentConsolidatedService

router = APIRouter(prefix="/documents", tags=["documents"])


class AssignBody(BaseModel):
    user_ids: list[UUID]


@router.get("", summary="List consolidated documents")
def list_documents(service: DocumentConsolidatedService = Depends(get_document_service)):
    return [serialize_document(doc) for doc in service.find_all()]


@router.get("/{metadata_id}", summary="Get a consolidated document by its metadata id")
def get_document(metadata_id: UUID, service: DocumentConsolidatedService = Depends(get_document_service)):
    return serialize_document(service.get_by_document_metadata_id(metadata_id))


@router.delete("/{document_id}", status_code=204, summary="Delete a consolidated document")
def delete_document(document_id: UUID, service: DocumentConsolidatedService = Depends(get_document_service)):
    service.delete_by_id(document_id)
    return Response(status_code=204)


@router.get("/{metadata_id}/assignments", summary="Users assigned to a document")
def list_assignments(
    metadata_id: UUID,
    service: DocumentAssignmentService = Depends(get_assignment_service),
):
    return [serialize_user(user) for user in service.assigned_users(metadata_id)]


@router.post("/{metadata_id}/assignments", summary="Assign users and email them")
def assign_users(
    metadata_id: UUID,
    body: AssignBody,
    db: Session = Depends(get_db),
    service: DocumentAssignmentService = Depends(get_assignment_service),
):
    try:
        added = service.assign_users(metadata_id, body.user_ids)
    except DeliveryFailedError:
        # Assignments stand even when some emails bounce.
        db.commit()
        raise
    return [serialize_user(user) for user in added]
