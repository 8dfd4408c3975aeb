from __future__ import annotations

from typing import Final, Literal, TypeAlias

# String values used in security-audit logging. Keep event and reason names
# here so call sites cannot drift apart.


AuthAuditEvent: TypeAlias = Literal[
    "password_login",
    "signup",
    "logout",
]

AuthDeniedReason: TypeAlias = Literal[
    "account_not_found",
    "invalid_credentials",
    "account_exists",
]

AdminAuditEvent: TypeAlias = Literal[
    "access",
    "service_create",
    "service_toggle",
    "service_delete",
    "queue_item_create",
    "queue_item_status_update",
    "queue_item_delete",
    "gallery_image_create",
    "gallery_image_update",
    "gallery_image_visibility_toggle",
    "gallery_image_delete",
    "gallery_tag_create",
    "gallery_tag_update",
    "gallery_tag_delete",
]

AdminDeniedReason: TypeAlias = Literal[
    "not_authenticated",
    "admin_role_required",
    "superadmin_role_required",
]


# Auth events
AUTH_EVENT_PASSWORD_LOGIN: Final[str] = "password_login"
AUTH_EVENT_SIGNUP: Final[str] = "signup"
AUTH_EVENT_LOGOUT: Final[str] = "logout"

# Auth denied reasons
AUTH_REASON_ACCOUNT_NOT_FOUND: Final[str] = "account_not_found"
AUTH_REASON_INVALID_CREDENTIALS: Final[str] = "invalid_credentials"
AUTH_REASON_ACCOUNT_EXISTS: Final[str] = "account_exists"

# Admin events
ADMIN_EVENT_ACCESS: Final[str] = "access"
ADMIN_EVENT_SERVICE_CREATE: Final[str] = "service_create"
ADMIN_EVENT_SERVICE_TOGGLE: Final[str] = "service_toggle"
ADMIN_EVENT_SERVICE_DELETE: Final[str] = "service_delete"
ADMIN_EVENT_QUEUE_ITEM_CREATE: Final[str] = "queue_item_create"
ADMIN_EVENT_QUEUE_ITEM_STATUS_UPDATE: Final[str] = "queue_item_status_update"
ADMIN_EVENT_QUEUE_ITEM_DELETE: Final[str] = "queue_item_delete"
ADMIN_EVENT_GALLERY_IMAGE_CREATE: Final[str] = "gallery_image_create"
ADMIN_EVENT_GALLERY_IMAGE_UPDATE: Final[str] = "gallery_image_update"
ADMIN_EVENT_GALLERY_IMAGE_VISIBILITY_TOGGLE: Final[str] = "gallery_image_visibility_toggle"
ADMIN_EVENT_GALLERY_IMAGE_DELETE: Final[str] = "gallery_image_delete"
ADMIN_EVENT_GALLERY_TAG_CREATE: Final[str] = "gallery_tag_create"
ADMIN_EVENT_GALLERY_TAG_UPDATE: Final[str] = "gallery_tag_update"
ADMIN_EVENT_GALLERY_TAG_DELETE: Final[str] = "gallery_tag_delete"

# Admin denied reasons
ADMIN_REASON_NOT_AUTHENTICATED: Final[str] = "not_authenticated"
ADMIN_REASON_ADMIN_ROLE_REQUIRED: Final[str] = "admin_role_required"
ADMIN_REASON_SUPERADMIN_ROLE_REQUIRED: Final[str] = "superadmin_role_required"
