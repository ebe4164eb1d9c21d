from __future__ import annotations

from legalconsult.db.models import Comment, DocumentConsolidated, DocumentNode, User


def serialize_user(user: User) -> dict:
    return {
        "id": str(user.id),
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": user.role,
    }


def serialize_node(node: DocumentNode) -> dict:
    return {
        "id": str(node.id),
        "document_node_type": node.document_node_type,
        "title": node.title,
        "identifier": node.identifier,
        "content": node.content,
        "order_number": node.order_number,
        "children": [serialize_node(child) for child in node.children],
    }


def serialize_document(doc: DocumentConsolidated) -> dict:
    metadata = doc.document_metadata
    configuration = doc.document_configuration
    return {
        "id": str(doc.id),
        "document_metadata": {
            "id": str(metadata.id),
            "document_title": metadata.document_title,
            "document_initiator": metadata.document_initiator,
            "document_type": metadata.document_type,
            "document_number": metadata.document_number,
            "date_of_receipt": metadata.date_of_receipt.isoformat() if metadata.date_of_receipt else None,
        },
        "document_configuration": {
            "open_for_commenting": configuration.open_for_commenting,
            "excluded_from_consultation": configuration.excluded_from_consultation,
        },
        "document_node": serialize_node(doc.document_node),
    }


def serialize_comment(comment: Comment) -> dict:
    return {
        "id": str(comment.id),
        "document_node_id": str(comment.document_node_id),
        "user_id": str(comment.user_id),
        "text": comment.text,
        "status": comment.status,
        "created_at": comment.created_at.isoformat() if comment.created_at else None,
    }
