from __future__ import annotations

import enum
import uuid
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    pass


class AdminRole(enum.StrEnum):
    admin = "admin"
    superadmin = "superadmin"


class ServiceCategory(enum.StrEnum):
    car = "car"
    bike = "bike"


class QueueStatus(enum.StrEnum):
    waiting = "waiting"
    in_progress = "in_progress"
    done = "done"
    canceled = "canceled"


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    display_name: Mapped[str] = mapped_column(String(200))
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    role_assignment: Mapped[UserRoleAssignment | None] = relationship(
        back_populates="user", cascade="all, delete-orphan", uselist=False
    )


class UserRoleAssignment(Base):
    """Admin tier of a user. Users without a row have no admin access."""

    __tablename__ = "user_roles"

    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), primary_key=True)
    role: Mapped[AdminRole] = mapped_column(Enum(AdminRole, name="admin_role"))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    user: Mapped[User] = relationship(back_populates="role_assignment")


class Service(Base):
    __tablename__ = "services"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200))
    category: Mapped[ServiceCategory] = mapped_column(
        Enum(ServiceCategory, name="service_category"), default=ServiceCategory.car
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    duration_minutes: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )

    # No delete cascade: removing a service clears service_id on its queue items.
    queue_items: Mapped[list[QueueItem]] = relationship(back_populates="service")


class QueueItem(Base):
    __tablename__ = "queues"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    service_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("services.id", ondelete="SET NULL"), index=True, nullable=True
    )

    customer_name: Mapped[str] = mapped_column(String(200))
    vehicle_plate: Mapped[str] = mapped_column(String(32))
    status: Mapped[QueueStatus] = mapped_column(
        Enum(QueueStatus, name="queue_status"), default=QueueStatus.waiting
    )

    queued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )

    service: Mapped[Service | None] = relationship(back_populates="queue_items")


class GalleryImage(Base):
    __tablename__ = "gallery_images"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(200))
    image_url: Mapped[str] = mapped_column(String(1024))
    # Bucket key, e.g. "gallery/<uuid>.jpg"
    image_path: Mapped[str | None] = mapped_column(String(512), nullable=True)
    alt_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )

    tag_links: Mapped[list[GalleryImageTag]] = relationship(
        back_populates="image", cascade="all, delete-orphan"
    )
    tags: Mapped[list[GalleryTag]] = relationship(
        secondary="gallery_image_tags",
        order_by="GalleryTag.name",
        viewonly=True,
    )


class GalleryTag(Base):
    __tablename__ = "gallery_tags"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), unique=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    image_links: Mapped[list[GalleryImageTag]] = relationship(
        back_populates="tag", cascade="all, delete-orphan"
    )


class GalleryImageTag(Base):
    __tablename__ = "gallery_image_tags"

    image_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("gallery_images.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("gallery_tags.id", ondelete="CASCADE"), primary_key=True
    )

    image: Mapped[GalleryImage] = relationship(back_populates="tag_links")
    tag: Mapped[GalleryTag] = relationship(back_populates="image_links")


class AuditLog(Base):
    """Activity record written by the database; the app only reads it."""

    __tablename__ = "audit_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    action: Mapped[str] = mapped_column(String(50))
    table_name: Mapped[str] = mapped_column(String(100))
    record_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    actor_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )
