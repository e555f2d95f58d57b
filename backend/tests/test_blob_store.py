import logging

import pytest

from jewelry_store.core.errors import SizeLimitError, StorageError, UnsupportedMediaError, ValidationError
from jewelry_store.services.blob_store import IncomingBlob

from tests.conftest import PNG_BYTES


def _png(name="a.png"):
    return IncomingBlob(name, PNG_BYTES, "image/png")


def test_put_writes_file_under_prefix(blob_store):
    ref = blob_store.put(IncomingBlob("Photo.JPG", b"jpeg-data", "image/jpeg"))
    assert ref.startswith("/uploads/")
    assert ref.endswith(".jpg")
    assert blob_store.exists(ref)
    assert (blob_store.root / ref.rsplit("/", 1)[1]).read_bytes() == b"jpeg-data"


def test_generated_names_are_unique(blob_store):
    assert blob_store.put(_png()) != blob_store.put(_png())


@pytest.mark.parametrize(
    "blob",
    [
        IncomingBlob("a.gif", b"x", "image/gif"),
        IncomingBlob("a.png", b"x", "text/plain"),
        IncomingBlob("a.txt", b"x", "image/png"),
    ],
)
def test_put_rejects_other_media(blob_store, blob):
    with pytest.raises(UnsupportedMediaError):
        blob_store.put(blob)
    assert not blob_store.root.exists() or not any(blob_store.root.iterdir())


def test_put_rejects_oversized(blob_store):
    with pytest.raises(SizeLimitError):
        blob_store.put(IncomingBlob("big.png", b"x" * 2048, "image/png"))


def test_put_many_enforces_count(blob_store):
    with pytest.raises(ValidationError) as exc:
        blob_store.put_many([_png() for _ in range(5)], max_count=4)
    assert exc.value.field == "images"


def test_put_many_writes_nothing_when_one_part_is_bad(blob_store):
    with pytest.raises(UnsupportedMediaError):
        blob_store.put_many([_png(), IncomingBlob("b.gif", b"x", "image/gif")], max_count=4)
    assert not blob_store.root.exists() or not any(blob_store.root.iterdir())


def test_delete_is_idempotent(blob_store):
    ref = blob_store.put(_png())
    blob_store.delete(ref)
    assert not blob_store.exists(ref)
    blob_store.delete(ref)


def test_delete_ignores_foreign_and_traversal_refs(blob_store, tmp_path):
    outside = tmp_path / "keep.png"
    outside.write_bytes(b"x")
    blob_store.delete("/uploads/../keep.png")
    blob_store.delete("/elsewhere/keep.png")
    assert outside.exists()


def test_delete_reports_filesystem_errors(blob_store, unlink_denied):
    ref = blob_store.put(_png())
    with pytest.raises(StorageError):
        blob_store.delete(ref)
    assert blob_store.exists(ref)


def test_discard_logs_instead_of_raising(blob_store, store_images, unlink_denied, caplog):
    refs = store_images(2)
    with caplog.at_level(logging.WARNING, logger="jewelry_store.services.blob_store"):
        blob_store.discard(refs)
    assert all(blob_store.exists(r) for r in refs)
    assert caplog.text.count("Failed to delete image") == 2
