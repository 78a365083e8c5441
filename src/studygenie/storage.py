"""Blob storage adapter: upload a file, get back a retrieval URL."""
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ALLOWED_TYPES = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".txt": "text/plain",
}
DEFAULT_CHUNK_SIZE = 64 * 1024


class UploadError(Exception):
    """Raised when an upload is rejected or aborted."""


@dataclass(frozen=True)
class UploadSnapshot:
    bytes_transferred: int
    total_bytes: int

    @property
    def percent(self) -> float:
        if self.total_bytes == 0:
            return 100.0
        return self.bytes_transferred / self.total_bytes * 100


def validate_upload(file_path) -> Path:
    path = Path(file_path)
    if path.suffix.lower() not in ALLOWED_TYPES:
        raise UploadError("Please upload a PDF, DOCX, or TXT file")
    if not path.is_file():
        raise UploadError(f"File not found: {path}")
    return path


class BlobStorage:
    """Interface for storage backends."""

    def upload(self, file_path, on_progress=None) -> str:
        """Copy ``file_path`` into the bucket, replacing any object of the same name.

        The bytes land in a ``.part`` sibling first and only replace the stored
        object once the copy completes.
        """
        source = validate_upload(file_path)
        target = self.object_path(source.name)
        staging = target.with_suffix(target.suffix + ".part")
        total = source.stat().st_size
        transferred = 0
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with source.open("rb") as src, staging.open("wb") as dst:
                while True:
                    chunk = src.read(self.chunk_size)
                    if not chunk:
                        break
                    dst.write(chunk)
                    transferred += len(chunk)
                    if on_progress is not None:
                        on_progress(UploadSnapshot(transferred, total))
            staging.replace(target)
        except OSError as e:
            logger.error("Upload of %s failed: %s", source.name, e)
            staging.unlink(missing_ok=True)
            raise UploadError(f"Upload failed: {e}") from e
        if total == 0 and on_progress is not None:
            on_progress(UploadSnapshot(0, 0))
        url = target.resolve().as_uri()
        logger.info("Uploaded %s (%d bytes) to %s", source.name, total, url)
        return url
