"""Repository layer.

These repositories encapsulate the query patterns for each table.
Keep them focused on persistence/query shaping; write sequences live in services.
"""

from washdesk.db.repos.audit_logs import AuditLogRepository
from washdesk.db.repos.gallery import (
    GalleryImageRepository,
    GalleryImageTagRepository,
    GalleryTagRepository,
)
from washdesk.db.repos.queues import QueueRepository
from washdesk.db.repos.services import ServiceRepository
from washdesk.db.repos.user_roles import UserRoleRepository
from washdesk.db.repos.users import UserRepository

__all__ = [
    "AuditLogRepository",
    "GalleryImageRepository",
    "GalleryImageTagRepository",
    "GalleryTagRepository",
    "QueueRepository",
    "ServiceRepository",
    "UserRepository",
    "UserRoleRepository",
]
