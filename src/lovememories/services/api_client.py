"""HTTP client for the lovememories API.

The client never adds the PIN itself: it sends everything through the
dispatcher it was built with, which is authorized once the PIN screen is
unlocked. Error responses are raised as ``requests.HTTPError`` without retries.
"""

from typing import Any, BinaryIO

import requests

from ..logging_config import get_logger
from ..models.memory import Note, Photo
from .http_client import Dispatcher

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10


class LoveMemoriesClient:
    """Client for the photo and note endpoints."""

    def __init__(self, base_url: str, dispatcher: Dispatcher, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.dispatcher = dispatcher
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self.dispatcher(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        if response.status_code >= 400:
            logger.warning("api_request_failed", method=method, path=path, status_code=response.status_code)
        response.raise_for_status()
        return response

    @staticmethod
    def _search_params(search: str | None) -> dict[str, str] | None:
        return {"search": search} if search else None

    def verify_pin(self, pin: str) -> bool:
        """
        Ask the server whether a PIN is the shared PIN.

        Returns:
            bool: True on a 200 response with success, False on a 401
        """
        response = self.dispatcher(
            "POST", f"{self.base_url}/api/auth/verify", json={"pin": pin}, timeout=self.timeout
        )
        if response.status_code == 401:
            return False
        response.raise_for_status()
        return bool(response.json().get("success"))

    # Photos

    def list_photos(self, search: str | None = None) -> list[Photo]:
        """List photos newest first, optionally filtered by caption."""
        response = self._request("GET", "/api/photos", params=self._search_params(search))
        return [Photo.from_dict(item) for item in response.json()]

    def get_photo(self, photo_id: int) -> Photo:
        response = self._request("GET", f"/api/photos/{photo_id}")
        return Photo.from_dict(response.json())

    def upload_photo(
        self, file: BinaryIO | bytes, filename: str, content_type: str, caption: str | None = None
    ) -> Photo:
        """
        Upload one image.

        Args:
            file: Image bytes or a binary file object
            filename: Original filename, its extension is kept on the server
            content_type: MIME type of the image
            caption: Optional caption

        Returns:
            The created photo
        """
        data = {"caption": caption} if caption else None
        response = self._request(
            "POST", "/api/photos", files={"photo": (filename, file, content_type)}, data=data
        )
        photo = Photo.from_dict(response.json())
        logger.info("photo_uploaded", photo_id=photo.id, filename=photo.filename)
        return photo

    def delete_photo(self, photo_id: int) -> None:
        self._request("DELETE", f"/api/photos/{photo_id}")
        logger.info("photo_deleted", photo_id=photo_id)

    def photo_url(self, photo: Photo) -> str:
        """Public URL of the image file; served without the PIN so it can be embedded."""
        return f"{self.base_url}/api/uploads/{photo.filename}"

    # Notes

    def list_notes(self, search: str | None = None) -> list[Note]:
        """List notes newest first, optionally filtered by title."""
        response = self._request("GET", "/api/notes", params=self._search_params(search))
        return [Note.from_dict(item) for item in response.json()]

    def get_note(self, note_id: int) -> Note:
        response = self._request("GET", f"/api/notes/{note_id}")
        return Note.from_dict(response.json())

    def create_note(self, title: str, content: str) -> Note:
        response = self._request("POST", "/api/notes", json={"title": title, "content": content})
        note = Note.from_dict(response.json())
        logger.info("note_created", note_id=note.id)
        return note

    def update_note(self, note_id: int, title: str | None = None, content: str | None = None) -> Note:
        """Update the given fields of a note; fields left as None are kept."""
        payload = {key: value for key, value in (("title", title), ("content", content)) if value is not None}
        response = self._request("PUT", f"/api/notes/{note_id}", json=payload)
        return Note.from_dict(response.json())

    def delete_note(self, note_id: int) -> None:
        self._request("DELETE", f"/api/notes/{note_id}")
        logger.info("note_deleted", note_id=note_id)


def describe_http_error(error: requests.HTTPError) -> str:
    """Extract the server's message from an error response, for display."""
    response = error.response
    if response is None:
        return str(error)
    try:
        return str(response.json().get("message", response.text))
    except ValueError:
        return response.text or str(error)
