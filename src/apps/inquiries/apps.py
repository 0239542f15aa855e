"""Inquiries app configuration."""

import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class InquiriesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.inquiries"
    verbose_name = "Inquiries"

    def ready(self) -> None:
        """Warn about mail settings that will make every confirmation email fail."""
        from .notifier import verify_email_backend

        if not getattr(settings, "MAIL_FROM", ""):
            logger.warning("MAIL_FROM is not set, confirmation emails use DEFAULT_FROM_EMAIL.")
        if settings.EMAIL_BACKEND.startswith("anymail.") and not settings.ANYMAIL.get("MAILGUN_API_KEY"):
            logger.warning("MAILGUN_API_KEY is not set, confirmation emails will fail.")

        if settings.INQUIRY_VERIFY_MAIL_ON_STARTUP:
            verify_email_backend()
        else:
            logger.debug("Skipping mail backend check, INQUIRY_VERIFY_MAIL_ON_STARTUP is off.")
