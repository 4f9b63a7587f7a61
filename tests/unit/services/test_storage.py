"""
Unit tests for the uploads directory storage.
"""

import re
from unittest.mock import patch

import pytest

from lovememories.error_handling import StorageError
from lovememories.services.storage import UploadStorage


@pytest.fixture
def upload_storage(tmp_path):
    return UploadStorage(tmp_path / "uploads")


class TestGenerateFilename:
    """Test cases for stored filename generation."""

    def test_format(self):
        filename = UploadStorage.generate_filename("Holiday.JPG")

        assert re.fullmatch(r"\d{13}-\d+\.jpg", filename)

    def test_keeps_only_extension(self):
        filename = UploadStorage.generate_filename("../../etc/passwd.png")

        assert "/" not in filename
        assert filename.endswith(".png")

    def test_no_extension(self):
        assert re.fullmatch(r"\d+-\d+", UploadStorage.generate_filename("photo"))

    def test_uses_time_and_random(self):
        with patch("lovememories.services.storage.time.time", return_value=1700000000.5), patch(
            "lovememories.services.storage.random.random", return_value=0.5
        ):
            filename = UploadStorage.generate_filename("a.heic")

        assert filename == "1700000000500-500000000.heic"


class TestUploadStorage:
    """Test cases for saving and deleting uploads."""

    def test_creates_directory(self, tmp_path):
        storage = UploadStorage(tmp_path / "a" / "b")

        assert storage.uploads_dir.is_dir()

    def test_save_writes_file(self, upload_storage, sample_image_data):
        filename = upload_storage.save(sample_image_data, "cat.png")

        assert upload_storage.exists(filename)
        assert upload_storage.path_for(filename).read_bytes() == sample_image_data

    def test_delete(self, upload_storage, sample_image_data):
        filename = upload_storage.save(sample_image_data, "cat.png")

        assert upload_storage.delete(filename) is True
        assert not upload_storage.exists(filename)

    def test_delete_missing(self, upload_storage):
        assert upload_storage.delete("missing.png") is False

    @pytest.mark.parametrize("filename", ["../secret.txt", "nested/file.png", "/etc/passwd"])
    def test_rejects_paths_outside_directory(self, upload_storage, filename):
        with pytest.raises(StorageError) as exc_info:
            upload_storage.path_for(filename)

        assert exc_info.value.code == "invalid_filename"

    def test_save_failure(self, upload_storage, sample_image_data):
        with patch("pathlib.Path.write_bytes", side_effect=OSError("disk full")):
            with pytest.raises(StorageError) as exc_info:
                upload_storage.save(sample_image_data, "cat.png")

        assert exc_info.value.code == "write_failed"
