"""Credential store holding the shared PIN."""

from ..config import get_access_pin
from ..logging_config import get_logger

logger = get_logger(__name__)


class CredentialStore:
    """Holds the one accepted PIN and checks candidates against it."""

    def __init__(self, pin: str) -> None:
        if not isinstance(pin, str) or not pin.isdigit():
            raise ValueError("The access PIN must be a non-empty string of digits")
        self._pin = pin

    @property
    def pin_length(self) -> int:
        """Number of digits a complete entry has."""
        return len(self._pin)

    def is_valid(self, candidate: str | None) -> bool:
        """
        Check a candidate against the shared PIN.

        The comparison is exact: no trimming, no normalization.

        Args:
            candidate: Value to check, typically a PIN entry or an Authorization header

        Returns:
            bool: True if the candidate equals the PIN, False otherwise
        """
        return candidate == self._pin


_credential_store: CredentialStore | None = None


def get_credential_store() -> CredentialStore:
    """Get the global credential store built from the ACCESS_PIN setting."""
    global _credential_store
    if _credential_store is None:
        _credential_store = CredentialStore(get_access_pin())
        logger.info("credential_store_initialized", pin_length=_credential_store.pin_length)
    return _credential_store
