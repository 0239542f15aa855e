"""Inquiry submission workflow."""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from django.utils import timezone

from .exceptions import NotificationError, ValidationError
from .notifier import Notifier, build_confirmation_message
from .store import RecordStore
from .validators import normalize_inquiry, validate_inquiry

logger = logging.getLogger(__name__)

MESSAGE_SENT = "Inquiry saved and confirmation email sent"
MESSAGE_NOT_SENT = "Inquiry saved, but failed to send confirmation email"


@dataclass(frozen=True)
class NotificationResult:
    """Outcome of one confirmation email attempt."""

    success: bool
    sent_at: datetime
    error: str | None = None
    response: str | None = None

    @classmethod
    def ok(cls, response: Mapping[str, Any] | None) -> "NotificationResult":
        return cls(
            success=True,
            sent_at=timezone.now(),
            response=json.dumps(response, default=str) if response is not None else None,
        )

    @classmethod
    def failed(cls, error: str, response: str | None = None) -> "NotificationResult":
        return cls(success=False, sent_at=timezone.now(), error=error, response=response)

    def as_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "sentAt": self.sent_at.isoformat(),
            "error": self.error,
            "response": self.response,
        }

    def as_status_fields(self) -> dict[str, Any]:
        """Store columns recording this attempt."""
        return {
            "notification_sent": self.success,
            "notification_error": self.error,
            "notification_response": self.response,
            "notification_sent_at": self.sent_at,
        }


@dataclass(frozen=True)
class SubmissionOutcome:
    message: str
    inquiry: dict[str, Any]
    mail: NotificationResult

    def as_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "inquiry": self.inquiry,
            "mail": self.mail.as_dict(),
        }


class SubmissionWorkflow:
    """
    Validate, persist, notify, then record the notification outcome.

    Persisting is the only step that can fail the submission. The email is
    best-effort and its outcome is always reported. Recording that outcome on
    the stored inquiry is attempted exactly once; a failure there is logged
    and the submission still succeeds.
    """

    def __init__(self, store: RecordStore, notifier: Notifier) -> None:
        self.store = store
        self.notifier = notifier

    async def submit(self, payload: Mapping[str, Any]) -> SubmissionOutcome:
        """
        Run one submission end to end.

        Raises:
            ValidationError: payload rejected; nothing was stored.
            PersistenceError: the store could not create the record.
        """
        errors = validate_inquiry(payload)
        if errors:
            raise ValidationError(errors)

        inserted = await self.store.create(normalize_inquiry(payload))
        logger.info("Inquiry #%s saved for %s", inserted["id"], inserted["email"])

        mail = await self._notify(inserted)
        inquiry = await self._record_outcome(inserted, mail)

        return SubmissionOutcome(
            message=MESSAGE_SENT if mail.success else MESSAGE_NOT_SENT,
            inquiry=inquiry,
            mail=mail,
        )

    async def _notify(self, inquiry: dict[str, Any]) -> NotificationResult:
        try:
            message = build_confirmation_message(inquiry)
            response = await self.notifier.send(
                to=inquiry["email"],
                subject=message.subject,
                text_body=message.text_body,
                html_body=message.html_body,
            )
        except NotificationError as exc:
            logger.error("Confirmation email failed for inquiry #%s: %s", inquiry["id"], exc.message)
            return NotificationResult.failed(exc.message, exc.response)
        except Exception as exc:
            logger.exception("Confirmation email failed for inquiry #%s", inquiry["id"])
            return NotificationResult.failed(str(exc) or exc.__class__.__name__)
        return NotificationResult.ok(response)

    async def _record_outcome(self, inquiry: dict[str, Any], mail: NotificationResult) -> dict[str, Any]:
        try:
            return await self.store.update_by_id(inquiry["id"], mail.as_status_fields())
        except Exception:
            logger.exception("Failed to record notification status for inquiry #%s", inquiry["id"])
            return inquiry
