"""PIN verification endpoint used by the PIN screen in remote mode."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..logging_config import get_logger, log_security_event
from ..services.credentials import CredentialStore
from .dependencies import get_credential_store

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/verify")
async def verify_pin(request: Request, credential_store: CredentialStore = Depends(get_credential_store)):
    """
    Check a PIN sent in the body as {"pin": "..."}.

    Nothing is stored and no token is issued: the client keeps the PIN itself.
    """
    try:
        body = await request.json()
    except ValueError:
        body = None

    pin = body.get("pin") if isinstance(body, dict) else None

    if isinstance(pin, str) and credential_store.is_valid(pin):
        logger.info("pin_verified")
        return JSONResponse(status_code=200, content={"success": True})

    log_security_event("pin_verification_failed", path=request.url.path)
    return JSONResponse(status_code=401, content={"success": False, "message": "Invalid PIN"})
