"""Inquiries admin configuration."""

from django.contrib import admin

from .models import Inquiry


@admin.register(Inquiry)
class InquiryAdmin(admin.ModelAdmin):
    """Admin interface for inquiry submissions."""

    list_display = ("full_name", "email", "service_type", "budget_range", "notification_sent", "created_at")
    list_filter = ("notification_sent", "service_type", "created_at")
    search_fields = ("full_name", "email", "phone_number", "project_description")
    readonly_fields = (
        "notification_sent",
        "notification_error",
        "notification_response",
        "notification_sent_at",
        "created_at",
    )
    ordering = ("-created_at",)
