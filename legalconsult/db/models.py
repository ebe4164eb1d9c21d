from __future__ import annotations

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Table, Text, func, text as sql_text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from legalconsult.db.base import Base

document_user_assignments = Table(
    "document_user_assignments",
    Base.metadata,
    Column("document_consolidated_id", ForeignKey("document_consolidated.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    first_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    role: Mapped[str] = mapped_column(
        String(32), nullable=False, default="CONTRIBUTOR", server_default=sql_text("'CONTRIBUTOR'")
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    comments: Mapped[list[Comment]] = relationship(back_populates="user")


class DocumentMetadata(Base):
    __tablename__ = "document_metadata"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    document_title: Mapped[str] = mapped_column(String(512), nullable=False)
    document_initiator: Mapped[str | None] = mapped_column(String(256), nullable=True)
    document_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    document_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    date_of_receipt: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())


class DocumentNode(Base):
    __tablename__ = "document_nodes"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    parent_id: Mapped[UUID | None] = mapped_column(ForeignKey("document_nodes.id", ondelete="CASCADE"), nullable=True)
    document_node_type: Mapped[str] = mapped_column(
        String(32), nullable=False, default="DOCUMENT", server_default=sql_text("'DOCUMENT'")
    )
    title: Mapped[str | None] = mapped_column(String(512), nullable=True)
    identifier: Mapped[str | None] = mapped_column(String(64), nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    order_number: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default=sql_text("0"))

    parent: Mapped[DocumentNode | None] = relationship(back_populates="children", remote_side="DocumentNode.id")
    children: Mapped[list[DocumentNode]] = relationship(
        back_populates="parent", order_by="DocumentNode.order_number"
    )
    comments: Mapped[list[Comment]] = relationship(back_populates="document_node")


class DocumentConfiguration(Base):
    __tablename__ = "document_configurations"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    open_for_commenting: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sql_text("false")
    )
    excluded_from_consultation: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sql_text("false")
    )


class DocumentConsolidated(Base):
    """A document's metadata, root node and configuration, kept together."""

    __tablename__ = "document_consolidated"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    document_metadata_id: Mapped[UUID] = mapped_column(
        ForeignKey("document_metadata.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    document_node_id: Mapped[UUID] = mapped_column(ForeignKey("document_nodes.id"), nullable=False)
    document_configuration_id: Mapped[UUID] = mapped_column(
        ForeignKey("document_configurations.id"), nullable=False
    )

    document_metadata: Mapped[DocumentMetadata] = relationship()
    document_node: Mapped[DocumentNode] = relationship()
    document_configuration: Mapped[DocumentConfiguration] = relationship()
    assigned_users: Mapped[list[User]] = relationship(secondary=document_user_assignments)

    def __init__(
        self,
        document_metadata: DocumentMetadata | None = None,
        document_node: DocumentNode | None = None,
        document_configuration: DocumentConfiguration | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        if document_metadata is not None:
            self.document_metadata = document_metadata
        if document_node is not None:
            self.document_node = document_node
        if document_configuration is not None:
            self.document_configuration = document_configuration
        elif kwargs.get("document_configuration_id") is None:
            self.document_configuration = DocumentConfiguration(
                open_for_commenting=False,
                excluded_from_consultation=False,
            )


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    document_node_id: Mapped[UUID] = mapped_column(ForeignKey("document_nodes.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="PENDING", server_default=sql_text("'PENDING'")
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    document_node: Mapped[DocumentNode] = relationship(back_populates="comments")
    user: Mapped[User] = relationship(back_populates="comments")
