#!/usr/bin/env python3
"""Seed demo data: 3 users, 1 consolidated document with a small node tree, comments.

Usage:
    python scripts/seed_demo.py          # uses DATABASE_URL from env / .env
    DATABASE_URL=... python scripts/seed_demo.py
"""
from __future__ import annotations

import sys
from datetime import date

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

# Ensure project root is on sys.path
sys.path.insert(0, ".")

from legalconsult.core.settings import get_settings
from legalconsult.db.base import Base
from legalconsult.db.models import (
    Comment,
    DocumentConfiguration,
    DocumentConsolidated,
    DocumentMetadata,
    DocumentNode,
    User,
)


def seed(session: Session) -> None:
    """Insert demo users, one open consolidated document and a few comments."""

    demo_people = [
        # (first name, last name, email, role)
        ("Ana", "Popescu", "ana.popescu@example.ro", "ADMIN"),
        ("Mihai", "Ionescu", "mihai.ionescu@example.ro", "CONTRIBUTOR"),
        ("Ioana", "", "ioana@example.ro", "CONTRIBUTOR"),
    ]
    users = [
        User(first_name=first, last_name=last or None, email=email, role=role)
        for first, last, email, role in demo_people
    ]
    session.add_all(users)

    metadata = DocumentMetadata(
        document_title="Proiect de lege privind transparența decizională",
        document_initiator="Ministerul Justiției",
        document_type="LAW",
        document_number=128,
        date_of_receipt=date(2026, 9, 1),
    )
    root = DocumentNode(document_node_type="DOCUMENT", title=metadata.document_title, order_number=0)
    chapter = DocumentNode(document_node_type="CHAPTER", title="Dispoziții generale", identifier="I", order_number=1)
    article = DocumentNode(
        document_node_type="ARTICLE",
        identifier="1",
        content="Prezenta lege stabilește regulile de transparență a procesului decizional.",
        order_number=1,
    )
    chapter.children.append(article)
    root.children.append(chapter)

    document = DocumentConsolidated(
        metadata,
        root,
        DocumentConfiguration(open_for_commenting=True, excluded_from_consultation=False),
    )
    document.assigned_users.extend(users[1:])
    session.add(document)
    session.flush()

    session.add(Comment(document_node_id=article.id, user_id=users[1].id, text="Propun reformularea art. 1."))
    session.add(Comment(document_node_id=article.id, user_id=users[2].id, text="De acord cu forma actuală."))

    session.commit()
    print(f"Seeded {len(users)} Users, 1 DocumentConsolidated, 3 DocumentNodes, 2 Comments.")


def main() -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    Base.metadata.create_all(engine)

    with Session(engine) as session:
        seed(session)


if __name__ == "__main__":
    main()
