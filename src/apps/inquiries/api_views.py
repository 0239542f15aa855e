"""API views for inquiry intake and administration."""

import json
import logging

from django.contrib.auth import aauthenticate
from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .api_auth import BearerAuthMixin, TokenVerifier, check_rate_limit, get_client_ip, is_admin_user
from .exceptions import InternalError, PersistenceError, ValidationError
from .notifier import EmailNotifier, Notifier
from .services import SubmissionWorkflow
from .store import DjangoInquiryStore, RecordStore

logger = logging.getLogger(__name__)


def _parse_json_object(request: HttpRequest) -> dict | None:
    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


class StoreMixin:
    """Supplies the record store; override with ``as_view(store=...)``."""

    store: RecordStore | None = None

    def get_store(self) -> RecordStore:
        return self.store or DjangoInquiryStore()


@method_decorator(csrf_exempt, name="dispatch")
class SubmitInquiryView(StoreMixin, View):
    """Public: save an inquiry and send the confirmation email."""

    notifier: Notifier | None = None

    def get_notifier(self) -> Notifier:
        return self.notifier or EmailNotifier()

    async def post(self, request: HttpRequest) -> JsonResponse:
        data = _parse_json_object(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON body"}, status=400)

        workflow = SubmissionWorkflow(store=self.get_store(), notifier=self.get_notifier())
        try:
            outcome = await workflow.submit(data)
        except ValidationError as exc:
            return JsonResponse({"error": exc.message, "details": exc.errors}, status=exc.status_code)
        except PersistenceError as exc:
            return JsonResponse(
                {"error": "Failed to save inquiry", "details": exc.detail},
                status=exc.status_code,
            )
        except Exception:
            logger.exception("Inquiry submission failed")
            return JsonResponse({"error": InternalError.message}, status=InternalError.status_code)

        return JsonResponse(outcome.as_dict())


@method_decorator(csrf_exempt, name="dispatch")
class AuthenticateView(View):
    """Exchange admin credentials for a bearer token."""

    verifier: TokenVerifier | None = None

    async def post(self, request: HttpRequest) -> JsonResponse:
        client_ip = get_client_ip(request)
        if not check_rate_limit(f"auth:{client_ip}"):
            logger.warning("Authentication rate limit exceeded for %s", client_ip)
            return JsonResponse({"error": "Too many attempts. Try again later."}, status=429)

        data = _parse_json_object(request) or {}
        username = data.get("username")
        password = data.get("password")
        if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
            return JsonResponse({"error": "Invalid credentials"}, status=401)

        user = await aauthenticate(request, username=username, password=password)
        if user is None or not is_admin_user(user):
            logger.warning("Failed admin login for %s from %s", username, client_ip)
            return JsonResponse({"error": "Invalid credentials"}, status=401)

        token = (self.verifier or TokenVerifier()).issue(user)
        logger.info("Issued admin token for %s", user.email or user.get_username())
        return JsonResponse({"token": token})


@method_decorator(csrf_exempt, name="dispatch")
class AdminInquiryListView(BearerAuthMixin, StoreMixin, View):
    """Admin: list every inquiry, newest first."""

    async def get(self, request: HttpRequest) -> JsonResponse:
        try:
            inquiries = await self.get_store().list()
        except Exception:
            logger.exception("Failed to list inquiries for %s", request.principal.label)
            return JsonResponse({"error": "Failed to fetch inquiries"}, status=500)
        return JsonResponse(inquiries, safe=False)


@method_decorator(csrf_exempt, name="dispatch")
class AdminInquiryDeleteView(BearerAuthMixin, StoreMixin, View):
    """Admin: delete an inquiry. Unknown ids succeed the same way."""

    async def delete(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            deleted = await self.get_store().delete_by_id(pk)
        except Exception:
            logger.exception("Failed to delete inquiry #%s for %s", pk, request.principal.label)
            return JsonResponse({"error": "Failed to delete inquiry"}, status=500)

        logger.info("Inquiry #%s deleted by %s (%d removed)", pk, request.principal.label, deleted)
        return JsonResponse({"message": "Inquiry deleted"})


class HealthView(View):
    """Liveness check."""

    async def get(self, request: HttpRequest) -> JsonResponse:
        return JsonResponse({"status": "ok"})
