from washdesk.services.gallery_service import (
    ImageUpload,
    create_gallery_image,
    delete_gallery_image,
    relink_image_tags,
    update_gallery_image,
)

__all__ = [
    "ImageUpload",
    "create_gallery_image",
    "delete_gallery_image",
    "relink_image_tags",
    "update_gallery_image",
]
