"""FastAPI dependency injection: database sessions and service factories."""
from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from legalconsult.core.settings import MailConfig, get_settings
from legalconsult.db.repositories import (
    CommentRepository,
    DocumentConsolidatedRepository,
    DocumentNodeRepository,
    UserRepository,
)
from legalconsult.db.session import get_session_factory
from legalconsult.i18n.translator import Translator
from legalconsult.notification.dispatcher import NotificationDispatcher
from legalconsult.notification.templates import TemplateRenderer
from legalconsult.notification.transport import MailTransport, build_transport
from legalconsult.services.comments import CommentService
from legalconsult.services.document_assignment import DocumentAssignmentService
from legalconsult.services.document_consolidated import DocumentConsolidatedService
from legalconsult.services.users import UserService


def get_db() -> Generator[Session, None, None]:
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    db = get_session_factory()()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@lru_cache(maxsize=1)
def get_translator() -> Translator:
    return Translator(get_settings().locale)


@lru_cache(maxsize=1)
def get_mail_transport() -> MailTransport:
    return build_transport(get_settings())


@lru_cache(maxsize=1)
def get_template_renderer() -> TemplateRenderer:
    return TemplateRenderer()


def get_dispatcher(
    transport: MailTransport = Depends(get_mail_transport),
    translator: Translator = Depends(get_translator),
    renderer: TemplateRenderer = Depends(get_template_renderer),
) -> NotificationDispatcher:
    settings = get_settings()
    return NotificationDispatcher(
        transport=transport,
        translator=translator,
        renderer=renderer,
        config=MailConfig.from_settings(settings),
        max_workers=settings.mail_max_workers,
    )


def get_document_service(db: Session = Depends(get_db)) -> DocumentConsolidatedService:
    return DocumentConsolidatedService(DocumentConsolidatedRepository(db))


def get_assignment_service(
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> DocumentAssignmentService:
    return DocumentAssignmentService(DocumentConsolidatedRepository(db), UserRepository(db), dispatcher)


def get_user_service(
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> UserService:
    return UserService(UserRepository(db), dispatcher)


def get_comment_service(db: Session = Depends(get_db)) -> CommentService:
    return CommentService(
        CommentRepository(db),
        DocumentNodeRepository(db),
        DocumentConsolidatedRepository(db),
        UserRepository(db),
    )
