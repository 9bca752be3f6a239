"""Local file storage for uploaded cover art and audio previews."""

import enum
import logging
import secrets
import time
from pathlib import Path

from starlette.concurrency import run_in_threadpool

from label_cms.config import get_settings
from label_cms.exceptions import ValidationError
from label_cms.schemas.upload import UploadResult

logger = logging.getLogger(__name__)


class UploadKind(enum.StrEnum):
    """Kind of file being uploaded."""

    IMAGE = "image"
    AUDIO = "audio"


ALLOWED_CONTENT_TYPES: dict[UploadKind, frozenset[str]] = {
    UploadKind.IMAGE: frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"}),
    UploadKind.AUDIO: frozenset({"audio/mpeg", "audio/wav", "audio/ogg", "audio/mp4"}),
}


def parse_upload_kind(value: str | None) -> UploadKind:
    """Parse the declared upload type, raising ValidationError if unknown."""
    try:
        return UploadKind((value or "").strip().lower())
    except ValueError:
        raise ValidationError("Invalid file type: expected 'image' or 'audio'") from None


def _extension(filename: str | None) -> str:
    suffix = Path(filename or "").suffix.lstrip(".").lower()
    return suffix if suffix.isalnum() else "bin"


class LocalFileStorage:
    """Stores uploads on local disk and serves them under a URL prefix."""

    def __init__(
        self,
        root: str | Path,
        url_prefix: str,
        max_image_bytes: int,
        max_audio_bytes: int,
    ) -> None:
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = {
            UploadKind.IMAGE: max_image_bytes,
            UploadKind.AUDIO: max_audio_bytes,
        }

    def max_size(self, kind: UploadKind) -> int:
        """Largest accepted payload in bytes for ``kind``."""
        return self.max_bytes[kind]

    def validate(self, kind: UploadKind, size: int, content_type: str | None) -> None:
        """Check size and declared MIME type against the limits for ``kind``."""
        if size > self.max_size(kind):
            logger.info("Rejected %s upload of %d bytes: too large", kind.value, size)
            raise ValidationError("File size exceeds maximum limit")
        if (content_type or "").lower() not in ALLOWED_CONTENT_TYPES[kind]:
            logger.info("Rejected %s upload with content type %s", kind.value, content_type)
            raise ValidationError("Invalid file type")

    async def save(
        self,
        kind: UploadKind,
        content: bytes,
        content_type: str | None,
        original_filename: str | None = None,
    ) -> UploadResult:
        """Validate and store an upload, returning where it can be fetched."""
        self.validate(kind, len(content), content_type)

        stamp = int(time.time() * 1000)
        filename = f"{stamp}-{secrets.token_hex(8)}.{_extension(original_filename)}"
        folder = f"{kind.value}s"
        target = self.root / folder / filename

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)

        await run_in_threadpool(_write)
        logger.info("Stored %s upload %s (%d bytes)", kind.value, filename, len(content))

        return UploadResult(
            url=f"{self.url_prefix}/{folder}/{filename}",
            filename=filename,
            type=kind.value,
        )


def get_file_storage() -> LocalFileStorage:
    """Factory function to create the upload storage.

    Can be used as a FastAPI dependency.
    """
    settings = get_settings()
    return LocalFileStorage(
        root=settings.upload_dir,
        url_prefix=settings.upload_url_prefix,
        max_image_bytes=settings.max_image_upload_bytes,
        max_audio_bytes=settings.max_audio_upload_bytes,
    )
