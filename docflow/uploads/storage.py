import logging
import os
import random
import time
from dataclasses import dataclass
from pathlib import Path
from fastapi import UploadFile
from docflow.errors import PayloadTooLarge

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class StoredFile:
    file_name: str
    path: str
    mime_type: str | None
    size: int


class FileStorage:
    """Writes uploaded files under a single root directory with unique names."""

    def __init__(self, root: str | Path, max_bytes: int):
        self.root = Path(root)
        self.max_bytes = max_bytes

    def _unique_name(self, original: str) -> str:
        suffix = Path(original).suffix
        return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{suffix}"

    def save(self, upload: UploadFile) -> StoredFile:
        self.root.mkdir(parents=True, exist_ok=True)
        original = os.path.basename(upload.filename or "upload")
        dest = self.root / self._unique_name(original)

        size = 0
        with dest.open("wb") as out:
            while True:
                chunk = upload.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > self.max_bytes:
                    break
                out.write(chunk)
        if size > self.max_bytes:
            dest.unlink(missing_ok=True)
            raise PayloadTooLarge(f"{original} exceeds the upload limit of {self.max_bytes} bytes")

        logger.info("Stored upload %s as %s (%d bytes)", original, dest, size)
        return StoredFile(file_name=original, path=str(dest), mime_type=upload.content_type, size=size)
