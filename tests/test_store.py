"""Tests for the Django ORM record store."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest
from asgiref.sync import async_to_sync
from django.db import DatabaseError
from django.utils import timezone

from apps.inquiries.exceptions import PersistenceError
from apps.inquiries.models import Inquiry
from apps.inquiries.store import DjangoInquiryStore

RECORD = {
    "full_name": "Ann",
    "email": "ann@x.com",
    "phone_number": None,
    "service_type": "website",
    "budget_range": None,
    "project_description": None,
}


@pytest.fixture
def orm_store() -> DjangoInquiryStore:
    return DjangoInquiryStore(timeout=5)


@pytest.mark.django_db
class TestDjangoInquiryStore:
    """Tests for DjangoInquiryStore."""

    def test_create_assigns_id_and_defaults(self, orm_store: DjangoInquiryStore) -> None:
        record = async_to_sync(orm_store.create)(RECORD)

        assert record["id"] is not None
        assert record["created_at"] is not None
        assert record["notification_sent"] is False
        assert record["notification_sent_at"] is None
        assert record["project_description"] is None
        assert Inquiry.objects.filter(pk=record["id"]).exists()

    def test_update_by_id_returns_updated_record(self, orm_store: DjangoInquiryStore) -> None:
        record = async_to_sync(orm_store.create)(RECORD)
        sent_at = timezone.now()

        updated = async_to_sync(orm_store.update_by_id)(
            record["id"],
            {"notification_sent": True, "notification_response": "{}", "notification_sent_at": sent_at},
        )

        assert updated["notification_sent"] is True
        assert updated["notification_response"] == "{}"
        assert updated["notification_sent_at"] == sent_at.isoformat()

    def test_update_missing_record_raises(self, orm_store: DjangoInquiryStore) -> None:
        with pytest.raises(PersistenceError, match="update"):
            async_to_sync(orm_store.update_by_id)(9999, {"notification_sent": True})

    def test_list_is_newest_first(self, orm_store: DjangoInquiryStore) -> None:
        now = timezone.now()
        for offset in (5, 1, 3):
            inquiry = Inquiry.objects.create(full_name=f"N{offset}", email="n@x.com")
            Inquiry.objects.filter(pk=inquiry.pk).update(created_at=now - timedelta(minutes=offset))

        records = async_to_sync(orm_store.list)()

        assert [r["full_name"] for r in records] == ["N1", "N3", "N5"]

    def test_delete_reports_rows_removed(self, orm_store: DjangoInquiryStore) -> None:
        record = async_to_sync(orm_store.create)(RECORD)

        assert async_to_sync(orm_store.delete_by_id)(record["id"]) == 1
        assert async_to_sync(orm_store.delete_by_id)(record["id"]) == 0
        assert not Inquiry.objects.exists()

    def test_database_error_becomes_persistence_error(self, orm_store: DjangoInquiryStore) -> None:
        with (
            patch.object(Inquiry.objects, "acreate", new_callable=AsyncMock, side_effect=DatabaseError("disk full")),
            pytest.raises(PersistenceError) as exc_info,
        ):
            async_to_sync(orm_store.create)(RECORD)

        assert exc_info.value.message == "Failed to create inquiry"
        assert exc_info.value.detail == "disk full"

    def test_timeout_becomes_persistence_error(self) -> None:
        async def _hang(**kwargs):
            await asyncio.sleep(1)

        slow_store = DjangoInquiryStore(timeout=0.05)
        with (
            patch.object(Inquiry.objects, "acreate", new_callable=AsyncMock, side_effect=_hang),
            pytest.raises(PersistenceError) as exc_info,
        ):
            async_to_sync(slow_store.create)(RECORD)

        assert "Timed out" in exc_info.value.detail

    @pytest.mark.parametrize("pk", ["abc", "1.5", "", "1e3"])
    def test_delete_unusable_id_matches_nothing(self, orm_store: DjangoInquiryStore, pk: str) -> None:
        async_to_sync(orm_store.create)(RECORD)

        assert async_to_sync(orm_store.delete_by_id)(pk) == 0
        assert Inquiry.objects.count() == 1

    @pytest.mark.parametrize("field", ["full_name", "email", "phone_number", "service_type", "budget_range"])
    def test_submitted_text_columns_are_unbounded(self, field: str) -> None:
        model_field = Inquiry._meta.get_field(field)
        assert model_field.get_internal_type() == "TextField"
        assert model_field.max_length is None
