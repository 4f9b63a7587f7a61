"""Local disk storage for uploaded photos."""

import random
import time
from pathlib import Path

from ..error_handling import StorageError
from ..logging_config import get_logger

logger = get_logger(__name__)


class UploadStorage:
    """Writes accepted uploads to the uploads directory and removes them."""

    def __init__(self, uploads_dir: str | Path) -> None:
        """
        Initialize the storage, creating the uploads directory if needed.

        Args:
            uploads_dir: Directory served under /api/uploads
        """
        self.uploads_dir = Path(uploads_dir)
        try:
            self.uploads_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"Cannot create uploads directory: {self.uploads_dir}",
                code="uploads_dir_unavailable",
                original_exception=e,
            ) from e

        logger.info("upload_storage_initialized", uploads_dir=str(self.uploads_dir))

    @staticmethod
    def generate_filename(original_filename: str) -> str:
        """
        Build a unique stored name: "<epoch ms>-<random number><extension>".

        Args:
            original_filename: Name sent by the client, only its extension is kept

        Returns:
            The generated filename
        """
        unique_suffix = f"{int(time.time() * 1000)}-{round(random.random() * 1e9)}"  # nosec B311
        return unique_suffix + Path(original_filename).suffix.lower()

    def path_for(self, filename: str) -> Path:
        """Absolute path of a stored file. Rejects names that would leave the directory."""
        path = (self.uploads_dir / filename).resolve()
        if path.parent != self.uploads_dir.resolve():
            raise StorageError(f"Invalid stored filename: {filename}", code="invalid_filename")
        return path

    def save(self, image_data: bytes, original_filename: str) -> str:
        """
        Write an upload to disk.

        Returns:
            The generated filename

        Raises:
            StorageError: If the file cannot be written
        """
        filename = self.generate_filename(original_filename)
        try:
            self.path_for(filename).write_bytes(image_data)
        except OSError as e:
            raise StorageError(
                f"Failed to write upload {filename}",
                code="write_failed",
                details={"stored_filename": filename},
                original_exception=e,
            ) from e

        logger.info("upload_saved", stored_filename=filename, size=len(image_data))
        return filename

    def delete(self, filename: str) -> bool:
        """
        Delete a stored file if it exists.

        Returns:
            bool: True if a file was removed
        """
        path = self.path_for(filename)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(
                f"Failed to delete upload {filename}",
                code="delete_failed",
                details={"stored_filename": filename},
                original_exception=e,
            ) from e

        logger.info("upload_deleted", stored_filename=filename)
        return True

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).exists()
