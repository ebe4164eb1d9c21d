"""Initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa


revision: str = "0001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("first_name", sa.String(length=128), nullable=True),
        sa.Column("last_name", sa.String(length=128), nullable=True),
        sa.Column("role", sa.String(length=32), server_default=sa.text("'CONTRIBUTOR'"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "document_metadata",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("document_title", sa.String(length=512), nullable=False),
        sa.Column("document_initiator", sa.String(length=256), nullable=True),
        sa.Column("document_type", sa.String(length=64), nullable=True),
        sa.Column("document_number", sa.Integer(), nullable=True),
        sa.Column("date_of_receipt", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "document_nodes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("parent_id", sa.Uuid(), nullable=True),
        sa.Column("document_node_type", sa.String(length=32), server_default=sa.text("'DOCUMENT'"), nullable=False),
        sa.Column("title", sa.String(length=512), nullable=True),
        sa.Column("identifier", sa.String(length=64), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("order_number", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.ForeignKeyConstraint(["parent_id"], ["document_nodes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_document_nodes_parent_id", "document_nodes", ["parent_id"])

    op.create_table(
        "document_configurations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("open_for_commenting", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("excluded_from_consultation", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "document_consolidated",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("document_metadata_id", sa.Uuid(), nullable=False),
        sa.Column("document_node_id", sa.Uuid(), nullable=False),
        sa.Column("document_configuration_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["document_metadata_id"], ["document_metadata.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["document_node_id"], ["document_nodes.id"]),
        sa.ForeignKeyConstraint(["document_configuration_id"], ["document_configurations.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("document_metadata_id"),
    )

    op.create_table(
        "document_user_assignments",
        sa.Column("document_consolidated_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["document_consolidated_id"], ["document_consolidated.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("document_consolidated_id", "user_id"),
    )

    op.create_table(
        "comments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("document_node_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=32), server_default=sa.text("'PENDING'"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["document_node_id"], ["document_nodes.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comments_document_node_id", "comments", ["document_node_id"])


def downgrade() -> None:
    op.drop_index("ix_comments_document_node_id", table_name="comments")
    op.drop_table("comments")
    op.drop_table("document_user_assignments")
    op.drop_table("document_consolidated")
    op.drop_table("document_configurations")
    op.drop_index("ix_document_nodes_parent_id", table_name="document_nodes")
    op.drop_table("document_nodes")
    op.drop_table("document_metadata")
    op.drop_table("users")
