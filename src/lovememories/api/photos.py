"""Photo endpoints. Every route requires the PIN."""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from ..error_handling import DatabaseError, NotFoundError, StorageError, ValidationError
from ..services.image_processor import ImageValidator
from ..services.memories import MemoryStorage
from .dependencies import get_image_validator, get_storage, require_pin

router = APIRouter(prefix="/api/photos", tags=["photos"], dependencies=[Depends(require_pin)])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@router.get("")
def list_photos(search: str | None = None, storage: MemoryStorage = Depends(get_storage)):
    """List photos newest first; `search` filters on the caption."""
    try:
        photos = storage.search_photos(search) if search else storage.get_photos()
    except DatabaseError:
        return _error(500, "Failed to fetch photos")
    return [photo.to_dict() for photo in photos]


@router.get("/{photo_id}")
def get_photo(photo_id: int, storage: MemoryStorage = Depends(get_storage)):
    try:
        photo = storage.get_photo(photo_id)
    except DatabaseError:
        return _error(500, "Failed to fetch photo")

    if photo is None:
        raise NotFoundError("Photo not found", details={"photo_id": photo_id})
    return photo.to_dict()


@router.post("", status_code=201)
async def upload_photo(
    request: Request,
    storage: MemoryStorage = Depends(get_storage),
    validator: ImageValidator = Depends(get_image_validator),
):
    """
    Upload one image as multipart form data.

    Fields: `photo` (the file) and an optional `caption`.
    """
    form = await request.form()
    upload = form.get("photo")
    if not isinstance(upload, UploadFile):
        return _error(400, "No file uploaded")

    original_filename = upload.filename or ""
    image_data = await upload.read()

    try:
        validator.validate(image_data, original_filename, upload.content_type)
    except ValidationError as e:
        return _error(400, e.message)

    caption = form.get("caption")
    caption = caption if isinstance(caption, str) and caption else None

    try:
        photo = storage.add_photo(image_data, original_filename, caption)
    except (StorageError, DatabaseError):
        return _error(500, "Failed to upload photo")

    return JSONResponse(status_code=201, content=photo.to_dict())


@router.delete("/{photo_id}", status_code=204)
def delete_photo(photo_id: int, storage: MemoryStorage = Depends(get_storage)):
    try:
        storage.delete_photo(photo_id)
    except (StorageError, DatabaseError):
        return _error(500, "Failed to delete photo")
    return Response(status_code=204)
