"""Image validation for photo uploads."""

import io
import re
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from ..config import get_max_upload_size
from ..error_handling import ValidationError
from ..logging_config import get_logger

try:
    from pillow_heif import register_heif_opener  # type: ignore[import-untyped]

    register_heif_opener()
    HEIF_AVAILABLE = True
except ImportError:
    HEIF_AVAILABLE = False

logger = get_logger(__name__)


class ImageValidator:
    """Checks that an upload is an image of an accepted type and size."""

    # Matched against both the extension and the MIME type
    ALLOWED_TYPES = re.compile(r"jpeg|jpg|png|gif|heic")

    def __init__(self, max_file_size: int | None = None) -> None:
        self.max_file_size = max_file_size if max_file_size is not None else get_max_upload_size()

        if not HEIF_AVAILABLE:
            logger.warning("heif_support_unavailable", message="Install pillow-heif for HEIC support")

    def is_allowed_type(self, filename: str, content_type: str | None) -> bool:
        """
        Check the extension and the MIME type of an upload.

        Returns:
            bool: True only if both look like an accepted image type
        """
        extension = Path(filename or "").suffix.lower()
        return bool(self.ALLOWED_TYPES.search(extension)) and bool(
            self.ALLOWED_TYPES.search((content_type or "").lower())
        )

    def validate(self, image_data: bytes, filename: str, content_type: str | None) -> None:
        """
        Validate an upload before it is written to disk.

        Args:
            image_data: Raw file content
            filename: Original filename
            content_type: MIME type sent by the client

        Raises:
            ValidationError: If the type, size or content is not acceptable
        """
        if not self.is_allowed_type(filename, content_type):
            raise ValidationError(
                "Only images are allowed",
                code="unsupported_type",
                user_message="Seules les images sont acceptées.",
                details={"upload_filename": filename, "content_type": content_type},
            )

        file_size = len(image_data)
        if file_size == 0:
            raise ValidationError("Empty file", code="empty_file", details={"upload_filename": filename})

        if file_size > self.max_file_size:
            max_size_mb = self.max_file_size / (1024 * 1024)
            raise ValidationError(
                f"File too large (max {max_size_mb:.0f}MB)",
                code="file_too_large",
                user_message=f"La photo est trop volumineuse (maximum {max_size_mb:.0f} Mo).",
                details={"upload_filename": filename, "file_size": file_size, "max_size": self.max_file_size},
            )

        if Path(filename).suffix.lower() == ".heic" and not HEIF_AVAILABLE:
            # Pillow cannot read HEIC without the plugin; accept it on type alone
            return

        try:
            with Image.open(io.BytesIO(image_data)) as image:
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise ValidationError(
                "Only images are allowed",
                code="invalid_image",
                user_message="Le fichier n'est pas une image lisible.",
                details={"upload_filename": filename},
                original_exception=e,
            ) from e
