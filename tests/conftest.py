from __future__ import annotations

import pytest

from fakes import InMemoryAccounts, InMemoryAttendance, InMemoryProfiles, InMemoryReports, InMemoryStore
from school_attendance.container import wire
from school_attendance.main import create_app
from school_attendance.users.tokens import SessionIssuer

TESTING_SETTINGS = "school_attendance.config.testing"


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def attendance_repo(store) -> InMemoryAttendance:
    return InMemoryAttendance(store)


@pytest.fixture
def container(store, attendance_repo):
    return wire(
        accounts_repo=InMemoryAccounts(store),
        profiles_repo=InMemoryProfiles(store),
        attendance_repo=attendance_repo,
        reports_repo=InMemoryReports(store),
        tokens=SessionIssuer("test-secret"),
    )


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module=TESTING_SETTINGS)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    """Log the test client in; the session cookie is kept for later requests."""

    def _login(email: str, password: str = "password123"):
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login
