"""PIN gate for lovememories application.

The gate keeps the application locked until the shared PIN is typed on the
keypad. It moves through four states:

- LOCKED: waiting for the first digit
- UNLOCKING: some digits typed, fewer than the PIN length
- ERROR: a complete entry was rejected; the entry is cleared once the error
  delay has elapsed, or as soon as the next key is pressed
- UNLOCKED: the token is persisted and requests are sent through an
  authorized dispatcher

A persisted token restores the UNLOCKED state without asking for the PIN
again. Logging out removes the token and goes back to LOCKED.
"""

import time
from collections.abc import Callable
from enum import Enum

from ..config import get_api_base_url, get_pin_error_delay, get_pin_verify_mode
from ..error_handling import InvalidCredentialError
from ..logging_config import get_logger, log_user_action
from .api_client import LoveMemoriesClient
from .client_state import AUTH_FLAG_KEY, TOKEN_KEY, ClientStateStore
from .credentials import get_credential_store
from .http_client import Dispatcher, authorize, create_session_dispatcher, unwrap

logger = get_logger(__name__)

Notifier = Callable[[str, str, str], None]
Validator = Callable[[str], bool]


class GateState(Enum):
    """States of the PIN gate."""

    LOCKED = "locked"
    UNLOCKING = "unlocking"
    UNLOCKED = "unlocked"
    ERROR = "error"


def _silent_notifier(title: str, description: str, variant: str) -> None:
    logger.debug("notification", title=title, description=description, variant=variant)


class PinGate:
    """State machine behind the PIN screen."""

    def __init__(
        self,
        validator: Validator,
        state_store: ClientStateStore,
        base_dispatcher: Dispatcher,
        pin_length: int = 4,
        error_delay: float = 0.8,
        clock: Callable[[], float] = time.monotonic,
        notifier: Notifier | None = None,
    ) -> None:
        """
        Initialize the gate, restoring a persisted session if there is one.

        Args:
            validator: Returns True when a complete entry is the PIN
            state_store: Where the authenticated flag and token are persisted
            base_dispatcher: Dispatcher used while locked
            pin_length: Number of digits of a complete entry
            error_delay: Seconds before a rejected entry is cleared
            clock: Monotonic clock in seconds
            notifier: Called with (title, description, variant) for user notifications
        """
        self._validator = validator
        self._state_store = state_store
        self._dispatcher: Dispatcher = base_dispatcher
        self.pin_length = pin_length
        self.error_delay = error_delay
        self._clock = clock
        self._notify = notifier or _silent_notifier

        self._state = GateState.LOCKED
        self._entered = ""
        self._clear_deadline: float | None = None
        self.error_visible = False
        self.last_error: InvalidCredentialError | None = None
        self.validation_attempts = 0

        self._restore()

    def _restore(self) -> None:
        token = self._state_store.get(TOKEN_KEY)
        if token:
            self._dispatcher = authorize(self._dispatcher, token)
            self._state = GateState.UNLOCKED
            logger.info("pin_gate_restored")

    @property
    def state(self) -> GateState:
        """Current state, after applying a pending clear whose delay has elapsed."""
        self._apply_pending_clear()
        return self._state

    @property
    def is_unlocked(self) -> bool:
        return self.state is GateState.UNLOCKED

    @property
    def entered_length(self) -> int:
        """Number of digits currently typed."""
        self._apply_pending_clear()
        return len(self._entered)

    @property
    def dispatcher(self) -> Dispatcher:
        """Dispatcher the rest of the application must use for API requests."""
        return self._dispatcher

    def remaining_error_delay(self) -> float | None:
        """Seconds left before the rejected entry is cleared, or None when nothing is pending."""
        self._apply_pending_clear()
        if self._clear_deadline is None:
            return None
        return max(0.0, self._clear_deadline - self._clock())

    def press_digit(self, digit: str) -> GateState:
        """
        Append one digit to the entry.

        Digits beyond the PIN length are ignored. When the entry reaches the PIN
        length it is validated exactly once.

        Raises:
            ValueError: If digit is not a single character 0-9
        """
        if len(digit) != 1 or not digit.isdigit():
            raise ValueError(f"Not a keypad digit: {digit!r}")

        if not self._begin_keypress():
            return self._state

        if len(self._entered) < self.pin_length:
            self._entered += digit
            self._state = GateState.UNLOCKING
            if len(self._entered) == self.pin_length:
                self._attempt()

        return self._state

    def delete_digit(self) -> GateState:
        """Remove the last typed digit."""
        if not self._begin_keypress():
            return self._state

        self._entered = self._entered[:-1]
        self._state = GateState.UNLOCKING if self._entered else GateState.LOCKED
        return self._state

    def login(self, pin: str) -> bool:
        """
        Validate a complete PIN and unlock on success.

        On success the authenticated flag and the token are persisted and the
        dispatcher is authorized with the token. Calling it again while unlocked
        replaces the token without stacking wrappers.

        Returns:
            bool: True if the PIN was accepted
        """
        if not self._validator(pin):
            return False

        self._state_store.set(AUTH_FLAG_KEY, "true")
        self._state_store.set(TOKEN_KEY, pin)
        self._dispatcher = authorize(self._dispatcher, pin)

        self._cancel_pending_clear()
        self._entered = ""
        self.error_visible = False
        self._state = GateState.UNLOCKED

        log_user_action("unlock")
        return True

    def logout(self) -> None:
        """Forget the persisted token and lock the application again."""
        self._state_store.remove(AUTH_FLAG_KEY)
        self._state_store.remove(TOKEN_KEY)
        self._dispatcher = unwrap(self._dispatcher)

        self._cancel_pending_clear()
        self._entered = ""
        self.error_visible = False
        self._state = GateState.LOCKED

        log_user_action("logout")
        self._notify("Déconnecté", "Vous avez été déconnecté avec succès.", "default")

    def _begin_keypress(self) -> bool:
        """Common handling before a key changes the entry. Returns False when keys are ignored."""
        self._apply_pending_clear()

        if self._state is GateState.UNLOCKED:
            logger.debug("keypress_ignored", reason="unlocked")
            return False

        if self._state is GateState.ERROR:
            # The rejected entry is dropped now instead of when the timer fires
            self._cancel_pending_clear()
            self._entered = ""
            self._state = GateState.LOCKED

        self.error_visible = False
        return True

    def _attempt(self) -> None:
        candidate = self._entered
        self.validation_attempts += 1

        try:
            accepted = self.login(candidate)
        except Exception:
            self._entered = ""
            self._state = GateState.LOCKED
            raise

        if accepted:
            return

        self.last_error = InvalidCredentialError(len(candidate))
        self._state = GateState.ERROR
        self.error_visible = True
        self._clear_deadline = self._clock() + self.error_delay
        self._notify("Code PIN incorrect", "Veuillez réessayer.", "destructive")

    def _apply_pending_clear(self) -> None:
        if self._clear_deadline is not None and self._clock() >= self._clear_deadline:
            self._clear_deadline = None
            self._entered = ""
            if self._state is GateState.ERROR:
                self._state = GateState.LOCKED

    def _cancel_pending_clear(self) -> None:
        self._clear_deadline = None


def create_pin_gate(
    state_store: ClientStateStore,
    base_dispatcher: Dispatcher | None = None,
    notifier: Notifier | None = None,
) -> PinGate:
    """
    Build a PIN gate from configuration.

    PIN_VERIFY_MODE selects the validator: "local" compares against the
    configured PIN, "remote" asks the API verify endpoint. The state store
    belongs to one browser, so a browser that never unlocked starts locked.
    """
    credential_store = get_credential_store()
    base_dispatcher = base_dispatcher or create_session_dispatcher()

    if get_pin_verify_mode() == "remote":
        validator: Validator = LoveMemoriesClient(get_api_base_url(), base_dispatcher).verify_pin
    else:
        validator = credential_store.is_valid

    return PinGate(
        validator=validator,
        state_store=state_store,
        base_dispatcher=base_dispatcher,
        pin_length=credential_store.pin_length,
        error_delay=get_pin_error_delay(),
        notifier=notifier,
    )
