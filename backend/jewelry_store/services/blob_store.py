"""Image blobs on local disk, addressed by their public URL (``/uploads/<name>``)."""
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from jewelry_store.core.errors import (
    SizeLimitError,
    StorageError,
    UnsupportedMediaError,
    ValidationError,
)

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png"}
IMAGE_CONTENT_TYPES = {"image/jpeg", "image/png"}


@dataclass
class IncomingBlob:
    """An uploaded file not yet written to the store."""

    filename: str
    content: bytes
    content_type: Optional[str] = None


class BlobStore:
    def __init__(self, root_dir: str, url_prefix: str = "/uploads", max_size_bytes: int = 25 * 1024 * 1024):
        self.root = Path(root_dir)
        self.url_prefix = "/" + url_prefix.strip("/")
        self.max_size_bytes = max_size_bytes

    def _ensure_root(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def url_for(self, name: str) -> str:
        return f"{self.url_prefix}/{name}"

    def _path_for(self, ref: str) -> Optional[Path]:
        """Disk path for a ref under this store, or None for foreign/unsafe refs."""
        prefix = self.url_prefix + "/"
        if not ref or not ref.startswith(prefix):
            return None
        name = ref[len(prefix):]
        if not name or "/" in name or "\\" in name or ".." in name:
            return None
        return self.root / name

    def check(self, blob: IncomingBlob) -> str:
        """Validate type and size; return the normalized extension."""
        ext = Path(blob.filename or "").suffix.lower()
        if ext not in IMAGE_EXTENSIONS or (blob.content_type or "").lower() not in IMAGE_CONTENT_TYPES:
            raise UnsupportedMediaError("Only jpg, jpeg, and png files are allowed")
        if len(blob.content) > self.max_size_bytes:
            raise SizeLimitError(f"Image must be under {self.max_size_bytes // (1024 * 1024)}MB")
        return ext

    def put(self, blob: IncomingBlob) -> str:
        """Write one image under a generated name and return its ref."""
        ext = self.check(blob)
        name = f"{uuid.uuid4().hex}{ext}"
        path = self._ensure_root() / name
        try:
            with open(path, "wb") as f:
                f.write(blob.content)
        except OSError as e:
            raise StorageError(f"Could not store image: {e}") from e
        ref = self.url_for(name)
        logger.info("Stored image %s (%d bytes)", ref, len(blob.content))
        return ref

    def put_many(self, blobs: Iterable[IncomingBlob], max_count: int, field: str = "images") -> list[str]:
        """Write several images; on any failure remove the ones already written."""
        blobs = list(blobs)
        if len(blobs) > max_count:
            raise ValidationError(field, f"Maximum {max_count} image(s) allowed")
        # Reject bad media before anything touches disk
        for blob in blobs:
            self.check(blob)
        refs: list[str] = []
        try:
            for blob in blobs:
                refs.append(self.put(blob))
        except Exception:
            self.discard(refs)
            raise
        return refs

    def exists(self, ref: str) -> bool:
        path = self._path_for(ref)
        return path is not None and path.is_file()

    def delete(self, ref: str) -> None:
        """Remove a blob. Missing or foreign refs are not an error."""
        path = self._path_for(ref)
        if path is None:
            logger.warning("Refusing to delete unrecognised image ref %r", ref)
            return
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Image already absent: %s", ref)
            return
        except OSError as e:
            raise StorageError(f"Could not delete image {ref}: {e}") from e
        logger.info("Deleted image %s", ref)

    def discard(self, refs: Iterable[str]) -> None:
        """Best-effort delete used for cleanup; failures are logged only."""
        for ref in refs:
            if not ref:
                continue
            try:
                self.delete(ref)
            except StorageError:
                logger.warning("Failed to delete image %s", ref, exc_info=True)
