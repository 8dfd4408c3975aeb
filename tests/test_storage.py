from __future__ import annotations

import re
from pathlib import Path

import pytest

from washdesk.errors import StorageError
from washdesk.settings import Settings
from washdesk.storage import BucketStorage, build_object_key, get_storage


def test_build_object_key_keeps_upload_extension() -> None:
    key = build_object_key("photo.final.png")
    assert re.fullmatch(r"gallery/[0-9a-f-]{36}\.png", key)


def test_build_object_key_defaults_to_jpg_without_extension() -> None:
    assert build_object_key("photo").endswith(".jpg")
    assert build_object_key(None).endswith(".jpg")


def test_upload_writes_object_and_resolves_public_url(tmp_path: Path) -> None:
    storage = BucketStorage(tmp_path, "/storage/")

    storage.upload("gallery", "gallery/a.jpg", b"img", content_type="image/jpeg")

    assert (tmp_path / "gallery" / "gallery" / "a.jpg").read_bytes() == b"img"
    assert storage.get_public_url("gallery", "gallery/a.jpg") == "/storage/gallery/gallery/a.jpg"


def test_upload_refuses_to_overwrite_without_upsert(tmp_path: Path) -> None:
    storage = BucketStorage(tmp_path, "/storage")
    storage.upload("gallery", "gallery/a.jpg", b"one")

    with pytest.raises(StorageError):
        storage.upload("gallery", "gallery/a.jpg", b"two")

    storage.upload("gallery", "gallery/a.jpg", b"two", upsert=True)
    assert (tmp_path / "gallery" / "gallery" / "a.jpg").read_bytes() == b"two"


@pytest.mark.parametrize("key", ["", "/etc/passwd", "gallery/../../escape.jpg"])
def test_invalid_keys_are_rejected(tmp_path: Path, key: str) -> None:
    storage = BucketStorage(tmp_path, "/storage")
    with pytest.raises(StorageError):
        storage.upload("gallery", key, b"x")


def test_remove_skips_missing_objects(tmp_path: Path) -> None:
    storage = BucketStorage(tmp_path, "/storage")
    storage.upload("gallery", "gallery/a.jpg", b"x")

    removed = storage.remove("gallery", ["gallery/a.jpg", "gallery/missing.jpg"])

    assert removed == ["gallery/a.jpg"]
    assert not (tmp_path / "gallery" / "gallery" / "a.jpg").exists()


def test_get_storage_creates_root(tmp_path: Path) -> None:
    root = tmp_path / "bucket-root"
    storage = get_storage(Settings(storage_dir=str(root), storage_public_base_url="/files"))

    assert root.is_dir()
    assert storage.public_base_url == "/files"


def test_upload_keeps_content_type_for_serving(tmp_path: Path) -> None:
    storage = BucketStorage(tmp_path, "/storage")
    storage.upload("gallery", "gallery/a.jpg", b"png-bytes", content_type="image/png")

    path, content_type = storage.locate("gallery", "gallery/a.jpg")

    assert path == tmp_path / "gallery" / "gallery" / "a.jpg"
    assert content_type == "image/png"


def test_locate_without_content_type_returns_none(tmp_path: Path) -> None:
    storage = BucketStorage(tmp_path, "/storage")
    storage.upload("gallery", "gallery/a.jpg", b"img")

    assert storage.locate("gallery", "gallery/a.jpg")[1] is None


def test_locate_hides_missing_objects_and_sidecars(tmp_path: Path) -> None:
    storage = BucketStorage(tmp_path, "/storage")
    storage.upload("gallery", "gallery/a.jpg", b"img", content_type="image/png")

    with pytest.raises(StorageError):
        storage.locate("gallery", "gallery/missing.jpg")
    with pytest.raises(StorageError):
        storage.locate("gallery", "gallery/a.jpg.meta.json")


def test_remove_deletes_content_type_sidecar(tmp_path: Path) -> None:
    storage = BucketStorage(tmp_path, "/storage")
    storage.upload("gallery", "gallery/a.jpg", b"img", content_type="image/png")

    storage.remove("gallery", ["gallery/a.jpg"])

    assert list((tmp_path / "gallery" / "gallery").iterdir()) == []


def test_build_object_key_ignores_dotfile_names() -> None:
    assert build_object_key(".heic").endswith(".jpg")
