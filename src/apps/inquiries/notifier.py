"""Confirmation email for inquiry submissions."""

import abc
import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

from anymail.exceptions import AnymailError
from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.template.loader import render_to_string

from .exceptions import NotificationError

logger = logging.getLogger(__name__)

NAME_FALLBACK = "there"
DESCRIPTION_FALLBACK = "(no description provided)"


@dataclass(frozen=True)
class ConfirmationMessage:
    subject: str
    text_body: str
    html_body: str


def build_confirmation_message(inquiry: dict[str, Any]) -> ConfirmationMessage:
    """Render the confirmation email from a persisted inquiry record."""
    brand = settings.INQUIRY_BRAND_NAME
    name = inquiry.get("full_name") or NAME_FALLBACK
    description = inquiry.get("project_description") or DESCRIPTION_FALLBACK

    subject = f"Thanks for contacting {brand}, {name}!"

    text_body = (
        f"Hi {name},\n\n"
        f"Thanks for your inquiry. We received your message:\n\n"
        f"{description}\n\n"
        f"We'll review it and get back to you shortly.\n\n"
        f"- {brand}"
    )

    html_body = render_to_string(
        "emails/inquiry_confirmation.html",
        {"name": name, "description": description, "brand": brand},
    )

    return ConfirmationMessage(subject=subject, text_body=text_body, html_body=html_body)


class Notifier(abc.ABC):
    """Sends a confirmation message to an email address."""

    @abc.abstractmethod
    async def send(self, *, to: str, subject: str, text_body: str, html_body: str) -> dict[str, Any]:
        """
        Deliver the message.

        Returns the provider response. Raises ``NotificationError`` on failure.
        """


class EmailNotifier(Notifier):
    """
    Notifier backed by the configured Django email backend.

    Mailgun through anymail in production, console in development, locmem in
    tests. The blocking send runs in the default executor and is bounded by
    ``timeout`` seconds.
    """

    def __init__(self, from_email: str | None = None, timeout: float | None = None) -> None:
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL
        self.timeout = timeout if timeout is not None else settings.INQUIRY_NOTIFIER_TIMEOUT

    def _send_sync(self, msg: EmailMultiAlternatives) -> dict[str, Any]:
        sent = msg.send(fail_silently=False)
        status = getattr(msg, "anymail_status", None)
        if status is not None and status.message_id:
            return {
                "message_id": status.message_id,
                "status": sorted(status.status or []),
            }
        return {"accepted": list(msg.to) if sent else [], "sent": sent}

    async def send(self, *, to: str, subject: str, text_body: str, html_body: str) -> dict[str, Any]:
        msg = EmailMultiAlternatives(
            subject=subject,
            body=text_body,
            from_email=self.from_email,
            to=[to],
        )
        msg.attach_alternative(html_body, "text/html")

        loop = asyncio.get_running_loop()
        try:
            response = await asyncio.wait_for(
                loop.run_in_executor(None, self._send_sync, msg),
                timeout=self.timeout,
            )
        except TimeoutError as exc:
            raise NotificationError(f"Email send timed out after {self.timeout}s") from exc
        except AnymailError as exc:
            provider_response = exc.response.text if exc.response is not None else None
            raise NotificationError(str(exc), provider_response) from exc
        except Exception as exc:
            raise NotificationError(str(exc) or exc.__class__.__name__) from exc

        logger.info("Confirmation email sent to %s: %s", to, json.dumps(response))
        return response


def verify_email_backend() -> bool:
    """Open and close a connection on the configured email backend. Logs the outcome."""
    try:
        connection = get_connection(fail_silently=False)
        connection.open()
        connection.close()
    except Exception:
        logger.exception("Mail backend verification failed (%s)", settings.EMAIL_BACKEND)
        return False
    logger.info("Mail backend ready (%s)", settings.EMAIL_BACKEND)
    return True
