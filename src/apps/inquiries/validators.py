"""Validation and normalization of inquiry submissions."""

import re
from collections.abc import Mapping
from typing import Any

EMAIL_PATTERN: re.Pattern[str] = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# Incoming payload key -> store column
OPTIONAL_FIELDS: dict[str, str] = {
    "phone": "phone_number",
    "serviceType": "service_type",
    "budgetRange": "budget_range",
    "projectDescription": "project_description",
}


def validate_inquiry(payload: Mapping[str, Any]) -> list[str]:
    """Return the validation errors for a submission, in rule order. Empty means valid."""
    errors: list[str] = []

    full_name = payload.get("fullName")
    if not isinstance(full_name, str) or not full_name.strip():
        errors.append("fullName is required")

    email = payload.get("email")
    if not isinstance(email, str) or not EMAIL_PATTERN.fullmatch(email):
        errors.append("valid email is required")

    return errors


def _optional(value: Any) -> str | None:
    # Only non-blank strings are kept; numbers, booleans and containers are dropped
    if not isinstance(value, str):
        return None
    return value.strip() or None


def normalize_inquiry(payload: Mapping[str, Any]) -> dict[str, str | None]:
    """
    Map a validated payload onto store columns.

    Absent or blank optional fields become explicit ``None``.
    """
    record: dict[str, str | None] = {
        "full_name": payload["fullName"].strip(),
        "email": payload["email"].strip(),
    }
    for key, column in OPTIONAL_FIELDS.items():
        record[column] = _optional(payload.get(key))
    return record
