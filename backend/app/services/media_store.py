"""Filesystem storage for part pictures.

Uploads are written to a staging directory first and only promoted into the
public media root once the owning database row has been committed.
"""
import logging
import os
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from app.core.config import settings
from app.core.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

WRITE_PROBE_NAME = ".write-test"


@dataclass(frozen=True)
class StagedImage:
    filename: str
    path: Path
    size: int


def sanitize_extension(original_filename: Optional[str]) -> str:
    """Keep a short alphanumeric extension from the client filename, if any."""
    suffix = Path(os.path.basename(original_filename or "")).suffix.lower()
    if not re.fullmatch(r"\.[a-z0-9]{1,10}", suffix):
        return ""
    return suffix


def default_staging_dir(root: Path) -> Path:
    return root.parent / f".{root.name}-staging"


def generate_filename(original_filename: Optional[str]) -> str:
    """part_<epoch ms>_<8 hex chars><ext>"""
    millis = int(time.time() * 1000)
    return f"part_{millis}_{secrets.token_hex(4)}{sanitize_extension(original_filename)}"


class MediaStore:
    def __init__(self, root, max_size: int = None, url_prefix: str = None, staging=None):
        self.root = Path(root)
        # Staging must stay outside the statically served root
        self.staging = Path(staging) if staging is not None else default_staging_dir(self.root)
        self.max_size = max_size if max_size is not None else settings.MAX_UPLOAD_SIZE
        self.url_prefix = (url_prefix or settings.MEDIA_URL_PREFIX).rstrip("/")

    def ensure_ready(self) -> None:
        """Create the media directories and verify the root is writable."""
        try:
            self.root.mkdir(parents=True, exist_ok=True, mode=0o755)
            self.staging.mkdir(parents=True, exist_ok=True)
            probe = self.root / WRITE_PROBE_NAME
            probe.write_bytes(b"test")
            probe.unlink()
        except OSError as e:
            logger.error(f"Media directory is not writable: {self.root} ({e})")
            raise StorageError(f"Media directory is not writable: {self.root}") from e
        logger.info(f"Media directory ready: {self.root}")

    def validate(self, content: bytes, content_type: Optional[str]) -> None:
        if not content_type or not content_type.lower().startswith("image/"):
            raise ValidationError("Only image files are allowed")
        if len(content) > self.max_size:
            raise ValidationError(
                f"File too large. Maximum size: {self.max_size // (1024 * 1024)}MB"
            )

    def stage(self, content: bytes, content_type: Optional[str], original_filename: Optional[str] = None) -> StagedImage:
        """Validate an upload and write it into the staging area."""
        self.validate(content, content_type)
        filename = generate_filename(original_filename)
        path = self.staging / filename
        try:
            self.staging.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            logger.error(f"Failed to stage upload {filename}: {e}")
            raise StorageError("Failed to store image") from e
        return StagedImage(filename=filename, path=path, size=len(content))

    def commit(self, staged: StagedImage) -> str:
        """Move a staged file into the media root and return its public path."""
        target = self.root / staged.filename
        try:
            os.replace(staged.path, target)
        except OSError as e:
            logger.error(f"Failed to promote staged image {staged.filename}: {e}")
            raise StorageError("Failed to store image") from e
        return self.public_path(staged.filename)

    def discard(self, staged: Optional[StagedImage]) -> None:
        if staged is None:
            return
        try:
            staged.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not discard staged image {staged.filename}: {e}")

    def public_path(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def resolve(self, public_path: Optional[str]) -> Optional[Path]:
        """Map a ``/media/...`` reference to a file under the root, or None."""
        if not public_path or not public_path.startswith(self.url_prefix + "/"):
            return None
        filename = os.path.basename(public_path)
        if not filename or filename.startswith("."):
            return None
        return self.root / filename

    def delete(self, public_path: Optional[str]) -> bool:
        """Remove a stored image; missing files and foreign references are ignored."""
        path = self.resolve(public_path)
        if path is None:
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Could not delete image {path}: {e}")
            return False
        logger.info(f"Deleted image file: {path}")
        return True


@dataclass(frozen=True)
class ImageUpload:
    """Raw upload as received from the client."""
    content: bytes
    content_type: Optional[str]
    filename: Optional[str] = None
