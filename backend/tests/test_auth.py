"""Tests for authentication: passcodes, tokens, terminal session and idle logout."""

import pytest
from datetime import timedelta

from app.core.local_storage import SESSION_USER_KEY, LocalStorage
from app.core.security import create_access_token, decode_access_token, verify_passcode
from app.models.enums import StaffRole, StaffStatus
from app.schemas.settings import SystemSettings
from app.schemas.staff import Staff
from app.services.app_state import AppState
from app.services.errors import DatabaseUnavailableError
from app.services.record_store import STAFF
from app.services.session_service import IdleTimer, SessionManager


# ============== Passcodes ==============

class TestPasscodes:
    def test_match(self):
        assert verify_passcode("1234", "1234")

    def test_numeric_stored_passcode(self):
        assert verify_passcode("1234", 1234)

    def test_mismatch(self):
        assert not verify_passcode("1234", "4321")

    def test_missing(self):
        assert not verify_passcode("1234", None)


# ============== JWT tokens ==============

class TestJWTTokens:
    def test_create_and_decode(self):
        token = create_access_token(data={"sub": "s1", "role": "MANAGER"})
        payload = decode_access_token(token)
        assert payload is not None
        assert payload["sub"] == "s1"
        assert payload["role"] == "MANAGER"
        assert "exp" in payload
        assert "jti" in payload

    def test_expired_token_rejected(self):
        token = create_access_token(data={"sub": "s1"}, expires_delta=timedelta(seconds=-1))
        assert decode_access_token(token) is None

    def test_token_without_subject_rejected(self):
        assert decode_access_token(create_access_token(data={"role": "ADMIN"})) is None

    def test_garbage_rejected(self):
        assert decode_access_token("not.a.token") is None


# ============== Role normalization ==============

class TestRoles:
    @pytest.mark.parametrize("raw", ["manager", " Manager ", "MANAGER"])
    def test_normalize(self, raw):
        assert StaffRole.normalize(raw) == StaffRole.MANAGER

    def test_invalid(self):
        with pytest.raises(ValueError):
            StaffRole.normalize("owner")

    def test_staff_record_normalizes(self):
        assert Staff(id="x", name="X", role="chef", passcode=1111).role == StaffRole.CHEF


# ============== Session manager ==============

STAFF_LIST = [
    Staff(id="s1", name="John Doe", role=StaffRole.MANAGER, passcode="1234"),
    Staff(id="s9", name="Off Duty", role=StaffRole.WAITER, passcode="9999", status=StaffStatus.OFF_DUTY),
]


@pytest.fixture
def session(timers):
    manager = SessionManager(LocalStorage(None), timer_factory=timers)
    manager.standby_minutes = 15
    return manager


class TestSessionManager:
    def test_login_success_persists_id(self, session):
        user = session.login(STAFF_LIST, "s1", "1234")
        assert user.id == "s1"
        assert session.current_user.id == "s1"
        assert session.storage.get(SESSION_USER_KEY) == "s1"
        assert session.idle_timer.armed

    def test_wrong_passcode(self, session):
        assert session.login(STAFF_LIST, "s1", "0000") is None
        assert session.current_user is None

    def test_inactive_staff_rejected(self, session):
        assert session.login(STAFF_LIST, "s9", "9999") is None

    def test_empty_staff_is_database_issue(self, session):
        with pytest.raises(DatabaseUnavailableError):
            session.login([], "s1", "1234")

    def test_logout_clears_storage(self, session, timers):
        session.login(STAFF_LIST, "s1", "1234")
        session.logout()
        assert session.current_user is None
        assert session.storage.get(SESSION_USER_KEY) is None
        assert timers.live == []

    def test_restore(self, timers):
        storage = LocalStorage(None)
        storage.set(SESSION_USER_KEY, "s1")
        manager = SessionManager(storage, timer_factory=timers)
        assert manager.restore(STAFF_LIST).id == "s1"

    def test_restore_discards_inactive(self, timers):
        storage = LocalStorage(None)
        storage.set(SESSION_USER_KEY, "s9")
        manager = SessionManager(storage, timer_factory=timers)
        assert manager.restore(STAFF_LIST) is None
        assert storage.get(SESSION_USER_KEY) is None


class TestIdleLogout:
    def test_expiry_logs_out(self, session, timers):
        session.login(STAFF_LIST, "s1", "1234")
        timer = timers.live[-1]
        assert timer.interval == 15 * 60
        timer.fire()
        assert session.current_user is None
        assert session.storage.get(SESSION_USER_KEY) is None

    def test_activity_restarts_window(self, session, timers):
        session.login(STAFF_LIST, "s1", "1234")
        first = timers.live[-1]
        assert session.record_activity("mousemove")
        assert first.cancelled
        second = timers.live[-1]
        assert second is not first
        assert second.interval == 15 * 60
        # The superseded timer can no longer log anyone out
        first.fire()
        assert session.current_user is not None
        second.fire()
        assert session.current_user is None

    def test_callback_racing_activity_is_ignored(self, session, timers):
        session.login(STAFF_LIST, "s1", "1234")
        first = timers.live[-1]
        session.record_activity("keypress")
        # The first timer's thread had already woken up when activity arrived
        first.run_late()
        assert session.current_user.id == "s1"
        assert session.idle_timer.armed
        assert timers.live[-1].interval == 15 * 60

    def test_stale_timer_cannot_log_out_next_user(self, session, timers):
        session.login(STAFF_LIST, "s1", "1234")
        session.record_activity("keypress")
        superseded = list(timers.timers)
        session.logout()
        session.login(STAFF_LIST, "s3", "2222")
        for timer in superseded:
            timer.run_late()
        assert session.current_user.id == "s3"
        timers.live[-1].fire()
        assert session.current_user is None

    def test_late_callback_after_logout_is_ignored(self, session, timers):
        session.login(STAFF_LIST, "s1", "1234")
        timer = timers.live[-1]
        session.logout()
        timer.run_late()
        assert session.current_user is None
        assert not session.idle_timer.armed

    def test_unknown_signal_ignored(self, session, timers):
        session.login(STAFF_LIST, "s1", "1234")
        assert not session.record_activity("resize")
        assert len(timers.timers) == 1

    def test_zero_minutes_disables(self, session, timers):
        session.standby_minutes = 0
        session.login(STAFF_LIST, "s1", "1234")
        assert not session.idle_timer.armed
        assert timers.timers == []

    def test_configure_idle_rearms(self, session, timers):
        session.login(STAFF_LIST, "s1", "1234")
        session.configure_idle(5)
        assert timers.live[-1].interval == 5 * 60
        assert len(timers.live) == 1

    def test_configure_idle_while_logged_out(self, session, timers):
        session.configure_idle(5)
        assert timers.timers == []

    def test_seconds_remaining(self, timers):
        now = [1000.0]
        timer = IdleTimer(lambda: None, timer_factory=timers, clock=lambda: now[0])
        timer.start(15)
        now[0] += 60
        assert timer.seconds_remaining == 14 * 60
        timer.cancel()
        assert timer.seconds_remaining is None


class TestStartupSession:
    def test_staff_seeded_and_session_restored(self, store, writer, timers):
        storage = LocalStorage(None)
        storage.set(SESSION_USER_KEY, "s2")
        state = AppState(store, writer, storage, timer_factory=timers)
        state.load()
        assert {s.id for s in store.select_all(STAFF)} == {"s1", "admin", "s2", "s3"}
        assert state.session.current_user.name == "Jane Smith"
        assert timers.live[-1].interval == 15 * 60

    def test_settings_change_rearms_timer(self, state, timers):
        state.session.login(state.staff, "s1", "1234")
        state.update_settings(SystemSettings(standby_minutes=30))
        assert timers.live[-1].interval == 30 * 60


# ============== API ==============

class TestAuthRoutes:
    def test_login(self, client):
        response = client.post("/api/v1/auth/login", json={"id": "s1", "passcode": "1234"})
        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["staff"]["role"] == "MANAGER"
        assert "passcode" not in body["staff"]

    def test_invalid_credentials(self, client):
        response = client.post("/api/v1/auth/login", json={"id": "s1", "passcode": "9999"})
        assert response.status_code == 401

    def test_empty_staff_collection(self, client, state):
        state.staff = []
        response = client.post("/api/v1/auth/login", json={"id": "s1", "passcode": "1234"})
        assert response.status_code == 503
        assert "Database connection issue" in response.json()["detail"]

    def test_me(self, client, waiter_headers):
        response = client.get("/api/v1/auth/me", headers=waiter_headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Mike Johnson"

    def test_logout_invalidates_token(self, client, manager_headers):
        assert client.post("/api/v1/auth/logout", headers=manager_headers).status_code == 200
        response = client.get("/api/v1/auth/me", headers=manager_headers)
        assert response.status_code == 401

    def test_new_login_supersedes_old_token(self, client, login_as):
        first = login_as("s1")
        login_as("s3")
        assert client.get("/api/v1/auth/me", headers=first).status_code == 401

    def test_idle_expiry_invalidates_token(self, client, state, timers, manager_headers):
        timers.live[-1].fire()
        assert client.get("/api/v1/auth/me", headers=manager_headers).status_code == 401
        assert client.get("/api/v1/auth/session").json()["authenticated"] is False

    def test_activity(self, client, state, timers, manager_headers):
        response = client.post("/api/v1/auth/activity", json={"signal": "keypress"}, headers=manager_headers)
        assert response.status_code == 200
        assert response.json()["idleTimerArmed"] is True
        assert response.json()["standbyMinutes"] == 15
        assert len(timers.live) == 1

    def test_deactivated_staff_locked_out(self, client, state, waiter_headers):
        state.update_staff("s3", {"status": StaffStatus.OFF_DUTY})
        assert client.get("/api/v1/auth/me", headers=waiter_headers).status_code == 401
