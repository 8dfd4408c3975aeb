"""Initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

ADMIN_ROLE = sa.Enum("admin", "superadmin", name="admin_role")
SERVICE_CATEGORY = sa.Enum("car", "bike", name="service_category")
QUEUE_STATUS = sa.Enum("waiting", "in_progress", "done", "canceled", name="queue_status")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("display_name", sa.String(length=200), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("role", ADMIN_ROLE, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_user_roles_user"),
    )

    op.create_table(
        "services",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("category", SERVICE_CATEGORY, nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_services_created_at", "services", ["created_at"], unique=False)

    op.create_table(
        "queues",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("service_id", sa.Uuid(as_uuid=True), nullable=True),
        sa.Column("customer_name", sa.String(length=200), nullable=False),
        sa.Column("vehicle_plate", sa.String(length=32), nullable=False),
        sa.Column("status", QUEUE_STATUS, nullable=False),
        sa.Column("queued_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["service_id"], ["services.id"], name="fk_queues_service", ondelete="SET NULL"
        ),
    )
    op.create_index("ix_queues_service_id", "queues", ["service_id"], unique=False)
    op.create_index("ix_queues_queued_at", "queues", ["queued_at"], unique=False)

    op.create_table(
        "gallery_images",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("image_url", sa.String(length=1024), nullable=False),
        sa.Column("image_path", sa.String(length=512), nullable=True),
        sa.Column("alt_text", sa.Text(), nullable=True),
        sa.Column("is_visible", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_gallery_images_created_at", "gallery_images", ["created_at"], unique=False
    )

    op.create_table(
        "gallery_tags",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("name", name="uq_gallery_tags_name"),
    )

    op.create_table(
        "gallery_image_tags",
        sa.Column("image_id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("tag_id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.ForeignKeyConstraint(
            ["image_id"],
            ["gallery_images.id"],
            name="fk_gallery_image_tags_image",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["tag_id"], ["gallery_tags.id"], name="fk_gallery_image_tags_tag", ondelete="CASCADE"
        ),
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("table_name", sa.String(length=100), nullable=False),
        sa.Column("record_id", sa.String(length=100), nullable=True),
        sa.Column("actor_id", sa.Uuid(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_audit_logs_created_at", table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_table("gallery_image_tags")
    op.drop_table("gallery_tags")
    op.drop_index("ix_gallery_images_created_at", table_name="gallery_images")
    op.drop_table("gallery_images")
    op.drop_index("ix_queues_queued_at", table_name="queues")
    op.drop_index("ix_queues_service_id", table_name="queues")
    op.drop_table("queues")
    op.drop_index("ix_services_created_at", table_name="services")
    op.drop_table("services")
    op.drop_table("user_roles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        QUEUE_STATUS.drop(bind, checkfirst=True)
        SERVICE_CATEGORY.drop(bind, checkfirst=True)
        ADMIN_ROLE.drop(bind, checkfirst=True)
