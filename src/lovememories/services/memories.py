"""
Storage service for photos, notes and the shared user, backed by DuckDB.

Lists are always returned newest first. Searches are case-insensitive substring
matches on the photo caption and on the note title; an empty query lists
everything.
"""

from datetime import UTC, datetime
from typing import Any

import duckdb

from ..error_handling import DatabaseError, StorageError
from ..logging_config import get_logger
from ..models.database import DatabaseManager, get_database_manager
from ..models.memory import Note, Photo, User, utc_now
from .storage import UploadStorage

logger = get_logger(__name__)

PHOTO_COLUMNS = "id, filename, caption, date"
NOTE_COLUMNS = "id, title, content, date"


def _to_db_timestamp(value: datetime) -> datetime:
    """Stored timestamps are naive UTC."""
    return value.astimezone(UTC).replace(tzinfo=None)


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class MemoryStorage:
    """
    Photo, note and user persistence.

    Deleting a photo also removes its file through the upload storage.
    """

    def __init__(self, db_manager: DatabaseManager, uploads: UploadStorage) -> None:
        self.db_manager = db_manager
        self.uploads = uploads

    def _query(self, operation: str, query: str, parameters: tuple | None = None) -> list[tuple]:
        try:
            return self.db_manager.execute_query(query, parameters)
        except duckdb.Error as e:
            raise DatabaseError(
                f"Database operation failed: {operation}",
                details={"operation": operation},
                original_exception=e,
            ) from e

    # Users

    def get_user(self, user_id: int) -> User | None:
        rows = self._query("get_user", "SELECT id, username, password FROM users WHERE id = ?", (user_id,))
        return User.from_row(rows[0]) if rows else None

    def get_user_by_username(self, username: str) -> User | None:
        rows = self._query(
            "get_user_by_username", "SELECT id, username, password FROM users WHERE username = ?", (username,)
        )
        return User.from_row(rows[0]) if rows else None

    def create_user(self, username: str, password: str) -> User:
        rows = self._query(
            "create_user",
            "INSERT INTO users (username, password) VALUES (?, ?) RETURNING id, username, password",
            (username, password),
        )
        user = User.from_row(rows[0])
        logger.info("user_created", user_id=user.id, username=username)
        return user

    # Photos

    def get_photos(self) -> list[Photo]:
        rows = self._query("get_photos", f"SELECT {PHOTO_COLUMNS} FROM photos ORDER BY date DESC, id DESC")
        return [Photo.from_row(row) for row in rows]

    def get_photo(self, photo_id: int) -> Photo | None:
        rows = self._query("get_photo", f"SELECT {PHOTO_COLUMNS} FROM photos WHERE id = ?", (photo_id,))
        return Photo.from_row(rows[0]) if rows else None

    def create_photo(self, filename: str, caption: str | None = None) -> Photo:
        """
        Record an uploaded photo, dated now.

        Args:
            filename: Generated name of the stored file
            caption: Optional caption

        Returns:
            The created photo
        """
        rows = self._query(
            "create_photo",
            f"INSERT INTO photos (filename, caption, date) VALUES (?, ?, ?) RETURNING {PHOTO_COLUMNS}",
            (filename, caption, _to_db_timestamp(utc_now())),
        )
        photo = Photo.from_row(rows[0])
        logger.info("photo_created", photo_id=photo.id, stored_filename=filename)
        return photo

    def add_photo(self, image_data: bytes, original_filename: str, caption: str | None = None) -> Photo:
        """
        Write an upload to disk and record it.

        The file is removed again when the row cannot be inserted, so no file
        is left without a photo.

        Raises:
            StorageError: If the file cannot be written
            DatabaseError: If the row cannot be inserted
        """
        filename = self.uploads.save(image_data, original_filename)
        try:
            return self.create_photo(filename, caption)
        except DatabaseError:
            self.uploads.delete(filename)
            logger.warning("orphan_upload_removed", stored_filename=filename)
            raise

    def delete_photo(self, photo_id: int) -> None:
        """
        Delete a photo and then its file. Unknown ids are ignored.

        The row goes first: a failed DELETE keeps both, while a file that
        cannot be removed afterwards is only left over on disk.
        """
        photo = self.get_photo(photo_id)
        if photo is None:
            return

        self._query("delete_photo", "DELETE FROM photos WHERE id = ?", (photo_id,))
        logger.info("photo_deleted", photo_id=photo_id)

        try:
            self.uploads.delete(photo.filename)
        except StorageError as e:
            logger.warning("photo_file_left_over", photo_id=photo_id, stored_filename=photo.filename, error=e.message)

    def search_photos(self, query: str | None) -> list[Photo]:
        if not query:
            return self.get_photos()

        rows = self._query(
            "search_photos",
            f"SELECT {PHOTO_COLUMNS} FROM photos WHERE caption ILIKE ? ESCAPE '\\' ORDER BY date DESC, id DESC",
            (_like_pattern(query),),
        )
        return [Photo.from_row(row) for row in rows]

    # Notes

    def get_notes(self) -> list[Note]:
        rows = self._query("get_notes", f"SELECT {NOTE_COLUMNS} FROM notes ORDER BY date DESC, id DESC")
        return [Note.from_row(row) for row in rows]

    def get_note(self, note_id: int) -> Note | None:
        rows = self._query("get_note", f"SELECT {NOTE_COLUMNS} FROM notes WHERE id = ?", (note_id,))
        return Note.from_row(rows[0]) if rows else None

    def create_note(self, title: str, content: str) -> Note:
        rows = self._query(
            "create_note",
            f"INSERT INTO notes (title, content, date) VALUES (?, ?, ?) RETURNING {NOTE_COLUMNS}",
            (title, content, _to_db_timestamp(utc_now())),
        )
        note = Note.from_row(rows[0])
        logger.info("note_created", note_id=note.id)
        return note

    def update_note(self, note_id: int, changes: dict[str, Any]) -> Note | None:
        """
        Update the title and/or content of a note and bump its date.

        Args:
            note_id: Note to update
            changes: Any of "title" and "content"; other keys are ignored

        Returns:
            The updated note, or None if it does not exist
        """
        if self.get_note(note_id) is None:
            return None

        assignments = ["date = ?"]
        parameters: list[Any] = [_to_db_timestamp(utc_now())]
        for column in ("title", "content"):
            if changes.get(column) is not None:
                assignments.append(f"{column} = ?")
                parameters.append(changes[column])
        parameters.append(note_id)

        self._query("update_note", f"UPDATE notes SET {', '.join(assignments)} WHERE id = ?", tuple(parameters))
        logger.info("note_updated", note_id=note_id, fields=sorted(k for k in changes if k in ("title", "content")))
        return self.get_note(note_id)

    def delete_note(self, note_id: int) -> None:
        self._query("delete_note", "DELETE FROM notes WHERE id = ?", (note_id,))
        logger.info("note_deleted", note_id=note_id)

    def search_notes(self, query: str | None) -> list[Note]:
        if not query:
            return self.get_notes()

        rows = self._query(
            "search_notes",
            f"SELECT {NOTE_COLUMNS} FROM notes WHERE title ILIKE ? ESCAPE '\\' ORDER BY date DESC, id DESC",
            (_like_pattern(query),),
        )
        return [Note.from_row(row) for row in rows]


def create_memory_storage(db_path: str, uploads_dir: str) -> MemoryStorage:
    """Open (creating if needed) the database and build the storage service."""
    return MemoryStorage(get_database_manager(db_path, create_if_missing=True), UploadStorage(uploads_dir))
