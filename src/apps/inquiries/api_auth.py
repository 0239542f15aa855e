"""Bearer-token authentication for the admin API."""

import logging
import time
from dataclasses import dataclass

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core import signing
from django.http import JsonResponse

from .exceptions import AuthError

logger = logging.getLogger(__name__)

TOKEN_SALT = "apps.inquiries.admin-token"

# Simple in-memory rate limiter (per-process)
_rate_limit_store: dict[str, list[float]] = {}


def get_client_ip(request) -> str:
    """
    Extract the client IP.

    X-Forwarded-For is only trusted for the ``INQUIRY_TRUSTED_PROXY_COUNT``
    right-most hops, which our own proxies appended. Anything left of that is
    client-supplied and ignored.
    """
    remote_addr = request.META.get("REMOTE_ADDR", "unknown")
    trusted = settings.INQUIRY_TRUSTED_PROXY_COUNT
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if not trusted or not forwarded:
        return remote_addr
    hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
    if len(hops) < trusted:
        return remote_addr
    return hops[-trusted]


def check_rate_limit(key: str) -> bool:
    """Return True if the request is within rate limits."""
    now = time.time()
    window_start = now - settings.INQUIRY_AUTH_RATE_WINDOW
    # Prune expired entries, dropping keys with nothing left in the window
    for stale_key in list(_rate_limit_store):
        recent = [t for t in _rate_limit_store[stale_key] if t > window_start]
        if recent:
            _rate_limit_store[stale_key] = recent
        else:
            del _rate_limit_store[stale_key]
    attempts = _rate_limit_store.setdefault(key, [])
    if len(attempts) >= settings.INQUIRY_AUTH_RATE_LIMIT:
        return False
    attempts.append(now)
    return True


def is_admin_user(user) -> bool:
    """Active users with any admin flag may use the admin API."""
    return bool(user.is_active and (user.is_admin or user.is_staff or user.is_superuser))


@dataclass(frozen=True)
class Principal:
    """Identity attached to an admin request after token verification."""

    user_id: int
    username: str
    email: str

    @property
    def label(self) -> str:
        return self.email or self.username


class TokenVerifier:
    """Issues and verifies signed, timestamped admin tokens."""

    def __init__(self, max_age: int | None = None) -> None:
        self.max_age = max_age if max_age is not None else settings.INQUIRY_TOKEN_MAX_AGE

    def issue(self, user) -> str:
        return signing.dumps({"uid": user.pk}, salt=TOKEN_SALT)

    async def verify(self, token: str) -> Principal | None:
        """Return the principal for a valid token, or None."""
        try:
            data = signing.loads(token, salt=TOKEN_SALT, max_age=self.max_age)
        except signing.SignatureExpired:
            logger.info("Expired admin token presented")
            return None
        except signing.BadSignature:
            logger.warning("Admin token with bad signature presented")
            return None

        user_id = data.get("uid") if isinstance(data, dict) else None
        if user_id is None:
            return None

        user = await get_user_model().objects.filter(pk=user_id).afirst()
        if user is None or not is_admin_user(user):
            logger.warning("Admin token for unknown or non-admin user %s", user_id)
            return None

        return Principal(user_id=user.pk, username=user.get_username(), email=user.email or "")


class BearerAuthMixin:
    """
    Mixin for class-based views that require a bearer token.

    Sets ``request.principal`` on success.
    """

    verifier: TokenVerifier | None = None

    def get_verifier(self) -> TokenVerifier:
        return self.verifier or TokenVerifier()

    def reject(self, error: AuthError) -> JsonResponse:
        return JsonResponse({"error": error.message}, status=error.status_code)

    async def dispatch(self, request, *args, **kwargs):
        """Verify the bearer token before dispatching to the handler."""
        auth_header = request.headers.get("Authorization", "")
        token = auth_header[7:].strip() if auth_header.startswith("Bearer ") else ""
        if not token:
            return self.reject(AuthError("Missing or invalid Authorization header. Use: Bearer <token>"))

        try:
            principal = await self.get_verifier().verify(token)
        except Exception:
            logger.exception("Token verification raised")
            principal = None

        if principal is None:
            logger.warning("Rejected admin request from %s", get_client_ip(request))
            return self.reject(AuthError())

        request.principal = principal

        return await super().dispatch(request, *args, **kwargs)
