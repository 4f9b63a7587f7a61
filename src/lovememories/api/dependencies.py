"""FastAPI dependencies, including the PIN authorizer for protected routes."""

from fastapi import Header, Request

from ..error_handling import UnauthorizedError
from ..services.credentials import CredentialStore
from ..services.image_processor import ImageValidator
from ..services.memories import MemoryStorage


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credential_store


def get_storage(request: Request) -> MemoryStorage:
    return request.app.state.storage


def get_image_validator(request: Request) -> ImageValidator:
    return request.app.state.image_validator


def require_pin(request: Request, authorization: str | None = Header(default=None)) -> None:
    """
    Reject the request unless its Authorization header is exactly the shared PIN.

    The header carries the raw PIN, without any scheme. The check runs on
    every request; nothing is cached between requests.

    Raises:
        UnauthorizedError: If the header is missing or does not match
    """
    credential_store = get_credential_store(request)
    if authorization is None:
        raise UnauthorizedError(code="missing_pin", details={"path": request.url.path})
    if not credential_store.is_valid(authorization):
        raise UnauthorizedError(code="invalid_pin", details={"path": request.url.path})
