"""
File upload storage for Rashed.

Uploaded files are checked against an extension allow-list and a size
limit, then written to the upload directory under a randomized name of the
form ``{epoch-ms}-{random}-{original basename}``. The original name is
recovered from that pattern when listing.
"""

import re
import secrets
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import status

from .config import UploadConfig, get_config
from .errors import UploadRejectedError
from .logging import get_logger

logger = get_logger("core.uploads")

# Extension (without dot) to the language name passed to code analysis
LANGUAGE_MAP = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "java": "java",
    "c": "c",
    "cpp": "c++",
    "cs": "c#",
    "php": "php",
    "go": "go",
    "rb": "ruby",
    "rs": "rust",
    "html": "html",
    "css": "css",
    "json": "json",
    "md": "markdown",
}


def language_for(filename: str) -> str:
    """Language name for ``filename``, falling back to the bare extension."""
    ext = Path(filename).suffix.lower().lstrip(".")
    return LANGUAGE_MAP.get(ext, ext)


def sanitize_filename(filename: str) -> str:
    """Strip path components and characters unsafe in file names."""
    name = Path(filename.replace("\\", "/")).name
    name = re.sub(r"[<>:\"/\\|?*\x00-\x1f]", "_", name)
    name = name[:200]
    if not name:
        name = f"file_{int(time.time())}"
    return name


def original_name(stored_name: str) -> str:
    """Recover the uploaded name from a stored ``{ms}-{random}-{name}`` file."""
    return "-".join(stored_name.split("-")[2:]) or stored_name


@dataclass
class UploadValidationResult:
    """Result of upload validation."""

    is_valid: bool
    sanitized_filename: Optional[str] = None
    extension: Optional[str] = None
    file_size: int = 0
    error: Optional[str] = None
    status_code: int = status.HTTP_400_BAD_REQUEST
    warnings: List[str] = field(default_factory=list)


class UploadStore:
    """Validates uploads and keeps them in the upload directory."""

    def __init__(self, config: Optional[UploadConfig] = None):
        self.config = config or get_config().uploads
        self.directory = Path(self.config.directory)

    def validate(self, filename: str, size: int) -> UploadValidationResult:
        """
        Check the name and size of an upload.

        Args:
            filename: Name sent by the client
            size: Size of the content in bytes
        """
        sanitized = sanitize_filename(filename)
        warnings = []
        if sanitized != filename:
            warnings.append("Filename was sanitized")

        extension = Path(sanitized).suffix.lower()
        if extension not in self.config.allowed_extensions:
            return UploadValidationResult(
                is_valid=False,
                sanitized_filename=sanitized,
                extension=extension,
                file_size=size,
                error="Only common file types are allowed",
            )

        if size > self.config.max_size:
            max_mb = self.config.max_size / (1024 * 1024)
            return UploadValidationResult(
                is_valid=False,
                sanitized_filename=sanitized,
                extension=extension,
                file_size=size,
                error=f"File exceeds maximum size of {max_mb:.1f}MB",
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )

        return UploadValidationResult(
            is_valid=True,
            sanitized_filename=sanitized,
            extension=extension,
            file_size=size,
            warnings=warnings,
        )

    def store(
        self, filename: str, content: bytes, content_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Validate and write an upload to disk.

        Returns:
            File info: filename, originalname, size, path, mimetype, uploadedAt

        Raises:
            UploadRejectedError: If the extension or size is not accepted
        """
        result = self.validate(filename, len(content))
        if not result.is_valid:
            logger.warning(
                "Upload rejected", filename=filename, size=len(content), reason=result.error
            )
            if result.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE:
                raise UploadRejectedError(
                    result.error, message="File too large", status_code=result.status_code
                )
            raise UploadRejectedError(result.error, message=result.error)

        stored_name = (
            f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}-"
            f"{result.sanitized_filename}"
        )
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / stored_name
        path.write_bytes(content)

        logger.info("File stored", filename=stored_name, size=len(content))
        return {
            "filename": stored_name,
            "originalname": filename,
            "size": len(content),
            "path": str(path),
            "mimetype": content_type or "application/octet-stream",
            "uploadedAt": datetime.now(timezone.utc).isoformat(),
        }

    def list_files(self) -> List[Dict[str, Any]]:
        """Info for every stored file, oldest first."""
        if not self.directory.is_dir():
            return []

        files = []
        for path in sorted(self.directory.iterdir()):
            if not path.is_file():
                continue
            stats = path.stat()
            files.append(
                {
                    "filename": path.name,
                    "originalname": original_name(path.name),
                    "size": stats.st_size,
                    "path": str(path),
                    "uploadedAt": datetime.fromtimestamp(
                        stats.st_mtime, tz=timezone.utc
                    ).isoformat(),
                }
            )
        return files
