from typing import Iterable, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from jewelry_store.core.auth import get_current_admin
from jewelry_store.core.deps import get_blob_store
from jewelry_store.core.errors import ValidationError
from jewelry_store.models.admin_user import AdminUser
from jewelry_store.schemas.admin import UploadResponse
from jewelry_store.services.blob_store import BlobStore, IncomingBlob

router = APIRouter()


def read_uploads(files: Optional[Iterable[Optional[UploadFile]]], max_size_bytes: int) -> list[IncomingBlob]:
    """Uploaded parts as IncomingBlobs; empty file inputs are skipped.

    At most one byte past ``max_size_bytes`` is read per part, enough for
    the store to reject an oversized file without buffering all of it.
    """
    blobs = []
    for f in files or []:
        if f is None or not f.filename:
            continue
        content = f.file.read(max_size_bytes + 1)
        blobs.append(IncomingBlob(filename=f.filename, content=content, content_type=f.content_type))
    return blobs


@router.post("/upload-image", response_model=UploadResponse)
def upload_image(
    upload: UploadFile = File(None),
    blob_store: BlobStore = Depends(get_blob_store),
    admin: AdminUser = Depends(get_current_admin),
):
    """Store one image (e.g. for embedding in news content) and return its URL."""
    blobs = read_uploads([upload], blob_store.max_size_bytes)
    if not blobs:
        raise ValidationError("upload", "No file provided")
    return UploadResponse(url=blob_store.put(blobs[0]))
