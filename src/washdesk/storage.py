"""Local object storage for gallery uploads.

Objects live under ``<root>/<bucket>/<key>`` and are served by the app at
``<public_base_url>/<bucket>/<key>``. The content type given at upload time is
kept in a ``<key>.meta.json`` sidecar and used when the object is served.
"""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from washdesk.errors import StorageError
from washdesk.logging_config import log_with_fields
from washdesk.settings import Settings, get_settings

logger = logging.getLogger("washdesk.storage")

DEFAULT_IMAGE_EXTENSION = "jpg"
META_SUFFIX = ".meta.json"


def build_object_key(filename: str | None, *, prefix: str = "gallery") -> str:
    """Return ``<prefix>/<uuid4>.<ext>`` using the upload's own extension.

    The extension is the file name's last suffix as ``pathlib`` sees it, so a
    name without a dot (``snapshot``) or a bare dotfile (``.heic``) gets
    ``jpg`` rather than the whole name. The served content type comes from the
    upload, not from this extension.
    """
    suffix = PurePosixPath(filename or "").suffix.lstrip(".")
    extension = suffix or DEFAULT_IMAGE_EXTENSION
    return f"{prefix}/{uuid.uuid4()}.{extension}"


def _validate_key(key: str) -> PurePosixPath:
    candidate = PurePosixPath(key)
    if not key or candidate.is_absolute() or ".." in candidate.parts:
        raise StorageError(f"Invalid object key: {key!r}")
    return candidate


def _meta_path(target: Path) -> Path:
    return target.with_name(target.name + META_SUFFIX)


class BucketStorage:
    def __init__(self, root: Path, public_base_url: str) -> None:
        self.root = root
        self.public_base_url = public_base_url.rstrip("/")

    def _object_path(self, bucket: str, key: str) -> Path:
        return self.root / _validate_key(bucket) / _validate_key(key)

    def upload(
        self,
        bucket: str,
        key: str,
        data: bytes,
        *,
        content_type: str | None = None,
        upsert: bool = False,
    ) -> str:
        if key.endswith(META_SUFFIX):
            raise StorageError(f"Invalid object key: {key!r}")
        target = self._object_path(bucket, key)
        if target.exists() and not upsert:
            raise StorageError("The resource already exists")

        meta = _meta_path(target)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
            if content_type:
                meta.write_text(json.dumps({"content_type": content_type}), encoding="utf-8")
            else:
                meta.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(str(exc)) from exc

        log_with_fields(
            logger,
            logging.INFO,
            "object stored",
            bucket=bucket,
            key=key,
            size=len(data),
            content_type=content_type,
        )
        return key

    def get_public_url(self, bucket: str, key: str) -> str:
        _validate_key(bucket)
        _validate_key(key)
        return f"{self.public_base_url}/{bucket}/{key}"

    def locate(self, bucket: str, key: str) -> tuple[Path, str | None]:
        """Return the object's file and its stored content type, if any."""
        target = self._object_path(bucket, key)
        if key.endswith(META_SUFFIX) or not target.is_file():
            raise StorageError("Object not found")

        meta = _meta_path(target)
        try:
            payload = json.loads(meta.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return target, None
        except (OSError, ValueError) as exc:
            raise StorageError(str(exc)) from exc

        content_type = payload.get("content_type") if isinstance(payload, dict) else None
        return target, content_type if isinstance(content_type, str) else None

    def remove(self, bucket: str, keys: Iterable[str]) -> list[str]:
        removed: list[str] = []
        for key in keys:
            target = self._object_path(bucket, key)
            try:
                _meta_path(target).unlink(missing_ok=True)
                target.unlink()
            except FileNotFoundError:
                continue
            except OSError as exc:
                raise StorageError(str(exc)) from exc
            removed.append(key)
        return removed


def get_storage(settings: Settings | None = None) -> BucketStorage:
    selected_settings = settings if settings is not None else get_settings()
    root = Path(selected_settings.storage_dir)
    root.mkdir(parents=True, exist_ok=True)
    return BucketStorage(root, selected_settings.storage_public_base_url)
