"""Note endpoints. Every route requires the PIN."""

import json
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from ..error_handling import DatabaseError, NotFoundError
from ..services.memories import MemoryStorage
from .dependencies import get_storage, require_pin

router = APIRouter(prefix="/api/notes", tags=["notes"], dependencies=[Depends(require_pin)])


class NoteCreate(BaseModel):
    """Body of POST /api/notes."""

    model_config = ConfigDict(strict=True)

    title: str
    content: str


class NoteUpdate(BaseModel):
    """Body of PUT /api/notes/{id}. Missing fields are left unchanged."""

    model_config = ConfigDict(strict=True)

    title: str | None = None
    content: str | None = None


def _error(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


def _invalid(error: PydanticValidationError) -> JSONResponse:
    return _error(400, "Invalid note data", errors=json.loads(error.json(include_url=False)))


@router.get("")
def list_notes(search: str | None = None, storage: MemoryStorage = Depends(get_storage)):
    """List notes newest first; `search` filters on the title."""
    try:
        notes = storage.search_notes(search) if search else storage.get_notes()
    except DatabaseError:
        return _error(500, "Failed to fetch notes")
    return [note.to_dict() for note in notes]


@router.get("/{note_id}")
def get_note(note_id: int, storage: MemoryStorage = Depends(get_storage)):
    try:
        note = storage.get_note(note_id)
    except DatabaseError:
        return _error(500, "Failed to fetch note")

    if note is None:
        raise NotFoundError("Note not found", details={"note_id": note_id})
    return note.to_dict()


@router.post("", status_code=201)
async def create_note(request: Request, storage: MemoryStorage = Depends(get_storage)):
    try:
        payload = NoteCreate.model_validate(await _read_json(request))
    except PydanticValidationError as e:
        return _invalid(e)

    try:
        note = storage.create_note(payload.title, payload.content)
    except DatabaseError:
        return _error(500, "Failed to create note")

    return JSONResponse(status_code=201, content=note.to_dict())


@router.put("/{note_id}")
async def update_note(note_id: int, request: Request, storage: MemoryStorage = Depends(get_storage)):
    """Update title and/or content. The note date is bumped to now."""
    try:
        payload = NoteUpdate.model_validate(await _read_json(request) or {})
    except PydanticValidationError as e:
        return _invalid(e)

    try:
        note = storage.update_note(note_id, payload.model_dump(exclude_none=True))
    except DatabaseError:
        return _error(500, "Failed to update note")

    if note is None:
        raise NotFoundError("Note not found", details={"note_id": note_id})
    return note.to_dict()


@router.delete("/{note_id}", status_code=204)
def delete_note(note_id: int, storage: MemoryStorage = Depends(get_storage)):
    try:
        storage.delete_note(note_id)
    except DatabaseError:
        return _error(500, "Failed to delete note")
    return Response(status_code=204)
