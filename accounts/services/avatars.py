"""Avatar upload filtering and storage."""

import logging
import uuid
from pathlib import Path

import aiofiles
from fastapi import UploadFile

from accounts.config import Settings, get_settings
from accounts.exceptions import UploadRejectedError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


class AvatarStore:
    """Validate avatar uploads and write accepted files to disk."""

    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        self.directory = Path(settings.avatar_dir)
        self.max_bytes = settings.avatar_max_bytes
        self.allowed_extensions = list(settings.avatar_extensions)

    def is_allowed_filename(self, filename: str | None) -> bool:
        """Case-sensitive suffix match against the allowed extensions."""
        if not filename:
            return False
        return any(filename.endswith(f".{extension}") for extension in self.allowed_extensions)

    async def save(self, upload_file: UploadFile) -> Path:
        """Stream an upload to the avatar directory.

        Returns:
            Path of the stored file

        Raises:
            UploadRejectedError: if the extension is not allowed or the file
                exceeds ``max_bytes``; a partially written file is removed
        """
        if not self.is_allowed_filename(upload_file.filename):
            logger.info(f"Rejected avatar with filename {upload_file.filename!r}")
            raise UploadRejectedError(f"Only {', '.join(self.allowed_extensions)} are allowed.")

        self.directory.mkdir(parents=True, exist_ok=True)
        destination = self.directory / uuid.uuid4().hex

        total_size = 0
        too_large = False
        async with aiofiles.open(destination, "wb") as f:
            while chunk := await upload_file.read(CHUNK_SIZE):
                total_size += len(chunk)
                if total_size > self.max_bytes:
                    too_large = True
                    break
                await f.write(chunk)

        if too_large:
            destination.unlink(missing_ok=True)
            logger.info(
                f"Rejected avatar {upload_file.filename!r}: larger than {self.max_bytes} bytes"
            )
            raise UploadRejectedError("File too large")

        logger.info(f"Stored avatar {upload_file.filename!r} as {destination.name}")
        return destination
