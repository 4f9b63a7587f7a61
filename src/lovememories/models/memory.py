"""
Photo, note and user models for lovememories application.

These dataclasses mirror the rows stored in DuckDB. Dates are stored as naive
UTC timestamps and exposed as timezone-aware datetimes.
"""

from dataclasses import dataclass
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def _as_aware(value: datetime | str) -> datetime:
    """Parse and normalize a stored date to an aware UTC datetime."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


@dataclass
class User:
    """The shared account row seeded into a new database."""

    id: int
    username: str
    password: str

    @classmethod
    def from_row(cls, row: tuple) -> "User":
        return cls(id=row[0], username=row[1], password=row[2])


@dataclass
class Photo:
    """
    Represents an uploaded photo.

    `filename` is the generated name under the uploads directory, `date` is the
    upload time used for newest-first ordering.
    """

    id: int
    filename: str
    caption: str | None
    date: datetime

    @classmethod
    def from_row(cls, row: tuple) -> "Photo":
        """Create a Photo from an (id, filename, caption, date) row."""
        return cls(id=row[0], filename=row[1], caption=row[2], date=_as_aware(row[3]))

    @classmethod
    def from_dict(cls, data: dict) -> "Photo":
        """Create a Photo from its JSON representation."""
        return cls(
            id=int(data["id"]),
            filename=data["filename"],
            caption=data.get("caption"),
            date=_as_aware(data["date"]),
        )

    def to_dict(self) -> dict:
        """
        Convert Photo to its JSON representation.

        Returns:
            Dictionary with id, filename, caption and ISO formatted date
        """
        return {
            "id": self.id,
            "filename": self.filename,
            "caption": self.caption,
            "date": self.date.isoformat(),
        }


@dataclass
class Note:
    """Represents a short text note. `date` is bumped on every update."""

    id: int
    title: str
    content: str
    date: datetime

    @classmethod
    def from_row(cls, row: tuple) -> "Note":
        """Create a Note from an (id, title, content, date) row."""
        return cls(id=row[0], title=row[1], content=row[2], date=_as_aware(row[3]))

    @classmethod
    def from_dict(cls, data: dict) -> "Note":
        """Create a Note from its JSON representation."""
        return cls(
            id=int(data["id"]),
            title=data["title"],
            content=data["content"],
            date=_as_aware(data["date"]),
        )

    def to_dict(self) -> dict:
        """Convert Note to its JSON representation."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "date": self.date.isoformat(),
        }
