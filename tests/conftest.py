"""Pytest configuration and shared fixtures for inquiry tests."""

from datetime import timedelta
from typing import Any

import pytest
from django.utils import timezone

from apps.inquiries import api_auth
from apps.inquiries.api_auth import Principal, TokenVerifier
from apps.inquiries.exceptions import NotificationError, PersistenceError
from apps.inquiries.notifier import Notifier
from apps.inquiries.store import RecordStore

ADMIN_PASSWORD = "adminpass123"  # noqa: S105


class FakeStore(RecordStore):
    """In-memory record store. Operations named in ``fail_on`` raise PersistenceError."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.records: dict[int, dict[str, Any]] = {}
        self.fail_on = fail_on or set()
        self.calls: list[str] = []
        self._next_id = 1
        self._clock = timezone.now()

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise PersistenceError(f"Failed to {operation} inquiry", f"{operation} is down")

    async def create(self, record: dict[str, Any]) -> dict[str, Any]:
        self._check("create")
        self._clock += timedelta(seconds=1)
        stored = {
            "id": self._next_id,
            **record,
            "notification_sent": False,
            "notification_error": None,
            "notification_response": None,
            "notification_sent_at": None,
            "created_at": self._clock.isoformat(),
        }
        self.records[self._next_id] = stored
        self._next_id += 1
        return dict(stored)

    async def update_by_id(self, pk: int, fields: dict[str, Any]) -> dict[str, Any]:
        self._check("update")
        stored = self.records[pk]
        for key, value in fields.items():
            stored[key] = value.isoformat() if hasattr(value, "isoformat") else value
        return dict(stored)

    async def list(self) -> list[dict[str, Any]]:
        self._check("list")
        return sorted(self.records.values(), key=lambda r: (r["created_at"], r["id"]), reverse=True)

    async def delete_by_id(self, pk: int | str) -> int:
        self._check("delete")
        try:
            pk = int(pk)
        except ValueError:
            return 0
        return 1 if self.records.pop(pk, None) is not None else 0


class FakeNotifier(Notifier):
    """Records sent messages. Raises ``error`` instead when set."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.sent: list[dict[str, str]] = []

    async def send(self, *, to: str, subject: str, text_body: str, html_body: str) -> dict[str, Any]:
        if self.error is not None:
            raise self.error
        self.sent.append({"to": to, "subject": subject, "text_body": text_body, "html_body": html_body})
        return {"message_id": f"<{len(self.sent)}@test>", "status": ["queued"]}


class FakeVerifier(TokenVerifier):
    """Accepts only the token ``good-token``."""

    def __init__(self) -> None:
        super().__init__(max_age=60)
        self.tokens: list[str] = []

    async def verify(self, token: str) -> Principal | None:
        self.tokens.append(token)
        if token == "good-token":
            return Principal(user_id=1, username="admin", email="admin@example.com")
        return None


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Start every test with an empty login rate limiter."""
    api_auth._rate_limit_store.clear()
    yield
    api_auth._rate_limit_store.clear()


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def failing_notifier() -> FakeNotifier:
    return FakeNotifier(error=NotificationError("SMTP connection refused", '{"code": 421}'))


@pytest.fixture
def verifier() -> FakeVerifier:
    return FakeVerifier()


@pytest.fixture
def admin_user(db):
    """Create an admin user."""
    from apps.accounts.models import User

    return User.objects.create_user(
        username="testadmin",
        email="admin@example.com",
        password=ADMIN_PASSWORD,
        is_admin=True,
    )


@pytest.fixture
def admin_token(admin_user) -> str:
    """A valid bearer token for the admin user."""
    return TokenVerifier().issue(admin_user)
