"""Record store for inquiries."""

import abc
import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from django.conf import settings
from django.db import DatabaseError

from .exceptions import PersistenceError
from .models import Inquiry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecordStore(abc.ABC):
    """CRUD contract the workflow and admin handlers depend on."""

    @abc.abstractmethod
    async def create(self, record: dict[str, Any]) -> dict[str, Any]:
        """Persist a record and return it with its id and created_at."""

    @abc.abstractmethod
    async def update_by_id(self, pk: int, fields: dict[str, Any]) -> dict[str, Any]:
        """Apply ``fields`` to the record and return the updated record."""

    @abc.abstractmethod
    async def list(self) -> list[dict[str, Any]]:
        """Return every record, newest first."""

    @abc.abstractmethod
    async def delete_by_id(self, pk: int | str) -> int:
        """Delete the record if present. Returns the number of rows removed."""


class DjangoInquiryStore(RecordStore):
    """
    Record store over the ``Inquiry`` model using the async ORM.

    Every call is bounded by ``timeout`` seconds. Database errors and timeouts
    are raised as ``PersistenceError``.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout if timeout is not None else settings.INQUIRY_STORE_TIMEOUT

    async def _run(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except TimeoutError as exc:
            logger.error("Inquiry store %s timed out after %ss", operation, self.timeout)
            raise PersistenceError(f"Failed to {operation} inquiry", f"Timed out after {self.timeout}s") from exc
        except DatabaseError as exc:
            logger.error("Inquiry store %s failed: %s", operation, exc)
            raise PersistenceError(f"Failed to {operation} inquiry", str(exc)) from exc

    async def create(self, record: dict[str, Any]) -> dict[str, Any]:
        inquiry = await self._run("create", Inquiry.objects.acreate(**record))
        return inquiry.to_dict()

    async def update_by_id(self, pk: int, fields: dict[str, Any]) -> dict[str, Any]:
        async def _update() -> Inquiry | None:
            updated = await Inquiry.objects.filter(pk=pk).aupdate(**fields)
            if not updated:
                return None
            return await Inquiry.objects.aget(pk=pk)

        inquiry = await self._run("update", _update())
        if inquiry is None:
            raise PersistenceError("Failed to update inquiry", f"Inquiry {pk} does not exist")
        return inquiry.to_dict()

    async def list(self) -> list[dict[str, Any]]:
        async def _fetch() -> list[dict[str, Any]]:
            return [inquiry.to_dict() async for inquiry in Inquiry.objects.order_by("-created_at", "-id")]

        return await self._run("fetch", _fetch())

    async def delete_by_id(self, pk: int | str) -> int:
        try:
            pk = int(pk)
        except (TypeError, ValueError):
            # Not an id this table can hold, so nothing matches
            return 0
        deleted, _ = await self._run("delete", Inquiry.objects.filter(pk=pk).adelete())
        return deleted
