"""Terminal session: login/logout, session restore and idle auto-logout."""

import logging
import threading
import time
from functools import partial
from typing import Callable, Iterable, Optional

from app.core.local_storage import SESSION_USER_KEY, LocalStorage
from app.core.security import verify_passcode
from app.schemas.staff import Staff
from app.services.errors import DatabaseUnavailableError

logger = logging.getLogger(__name__)
auth_logger = logging.getLogger("auth")

ACTIVITY_SIGNALS = frozenset({"mousedown", "mousemove", "keypress", "scroll", "touchstart"})


class IdleTimer:
    """Single-shot inactivity timer.

    Armed for ``minutes`` while a user is signed in; any activity signal
    restarts the full window and expiry calls ``on_expire``. ``timer_factory``
    must accept ``(interval_seconds, callback)`` and return an object with
    ``start()`` and ``cancel()`` (``threading.Timer`` by default).
    """

    def __init__(
        self,
        on_expire: Callable[[], None],
        timer_factory: Callable = threading.Timer,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.on_expire = on_expire
        self.timer_factory = timer_factory
        self.clock = clock
        self.minutes = 0
        self._timer = None
        self._deadline: Optional[float] = None
        self._generation = 0
        self._lock = threading.RLock()

    @property
    def armed(self) -> bool:
        return self._timer is not None

    @property
    def seconds_remaining(self) -> Optional[float]:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self.clock())

    def start(self, minutes: int) -> bool:
        """(Re)arm with a fresh window; ``minutes <= 0`` leaves the timer disarmed."""
        with self._lock:
            self.cancel()
            self.minutes = minutes
            if minutes <= 0:
                return False
            interval = minutes * 60
            self._generation += 1
            timer = self.timer_factory(interval, partial(self._expire, self._generation))
            if hasattr(timer, "daemon"):
                timer.daemon = True
            self._timer = timer
            self._deadline = self.clock() + interval
            timer.start()
            return True

    def reset(self) -> bool:
        with self._lock:
            if self._timer is None:
                return False
            return self.start(self.minutes)

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._deadline = None

    def _expire(self, generation: int) -> None:
        # A superseded timer may still call back after cancel()
        with self._lock:
            if generation != self._generation or self._timer is None:
                logger.debug("Ignoring expiry from a superseded idle timer")
                return
            self._timer = None
            self._deadline = None
            self.on_expire()


class SessionManager:
    """Holds the signed-in staff member for this terminal."""

    def __init__(self, storage: LocalStorage, timer_factory: Callable = threading.Timer):
        self.storage = storage
        self.current_user: Optional[Staff] = None
        self.standby_minutes = 0
        self.idle_timer = IdleTimer(self._on_idle, timer_factory=timer_factory)

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def login(self, staff: Iterable[Staff], staff_id: str, passcode: str) -> Optional[Staff]:
        """Sign in iff an ACTIVE staff record matches id and passcode."""
        staff = list(staff)
        if not staff:
            auth_logger.error("Login attempted with an empty staff collection")
            raise DatabaseUnavailableError()

        user = next(
            (s for s in staff if s.id == staff_id and verify_passcode(passcode, s.passcode)),
            None,
        )
        if user is None or not user.is_active:
            auth_logger.warning(f"Failed login for staff id '{staff_id}'")
            return None

        self.current_user = user
        self.storage.set(SESSION_USER_KEY, user.id)
        self.idle_timer.start(self.standby_minutes)
        auth_logger.info(f"Staff '{user.id}' ({user.role.value}) signed in")
        return user

    def restore(self, staff: Iterable[Staff]) -> Optional[Staff]:
        """Reinstate the stored session if it still names an ACTIVE staff member."""
        stored_id = self.storage.get(SESSION_USER_KEY)
        if not stored_id:
            return None
        user = next((s for s in staff if s.id == stored_id), None)
        if user is None or not user.is_active:
            self.storage.remove(SESSION_USER_KEY)
            logger.info(f"Discarded stored session for '{stored_id}'")
            return None
        self.current_user = user
        self.idle_timer.start(self.standby_minutes)
        auth_logger.info(f"Session restored for staff '{user.id}'")
        return user

    def logout(self, reason: str = "manual") -> None:
        user = self.current_user
        self.idle_timer.cancel()
        self.current_user = None
        self.storage.remove(SESSION_USER_KEY)
        if user is not None:
            auth_logger.info(f"Staff '{user.id}' signed out ({reason})")

    def refresh_user(self, user: Staff) -> None:
        """Keep the session copy in step with an edited staff record."""
        if self.current_user is not None and self.current_user.id == user.id:
            self.current_user = user

    def configure_idle(self, standby_minutes: int) -> None:
        self.standby_minutes = standby_minutes
        if self.current_user is None:
            self.idle_timer.cancel()
            return
        self.idle_timer.start(standby_minutes)

    def record_activity(self, signal: str) -> bool:
        """Restart the idle window; unknown signals are ignored."""
        if signal not in ACTIVITY_SIGNALS or self.current_user is None:
            return False
        return self.idle_timer.reset()

    def shutdown(self) -> None:
        self.idle_timer.cancel()

    def _on_idle(self) -> None:
        logger.info(f"Idle for {self.standby_minutes} minutes, logging out")
        self.logout(reason="idle")
