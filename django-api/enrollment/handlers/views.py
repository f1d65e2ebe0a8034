"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.conf import settings
from django.core.cache import cache
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from enrollment import dependencies
from enrollment.domain import RegistrantRef, WaiverRequirement, WaiverTemplateId
from enrollment.domain.errors import DomainError, EventNotFoundError
from enrollment.handlers import serializers as s
from enrollment.handlers.errors import error_response
from enrollment.handlers.permissions import IsEnrollmentAdmin, caller_is_admin
from enrollment.services.document_service import DocumentKind
from enrollment.signals import waiver_list_cache_key


class EnrollmentAPIView(APIView):
    """Base view: domain errors become coded responses, writes need an admin."""

    admin_methods: frozenset[str] = frozenset()

    def get_permissions(self):
        if self.request.method in self.admin_methods:
            return [IsEnrollmentAdmin()]
        return [IsAuthenticated()]

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            return error_response(exc)
        return super().handle_exception(exc)


def _requirements(rows) -> list[WaiverRequirement]:
    return [
        WaiverRequirement(
            waiver_id=WaiverTemplateId(value=row["waiver_id"]),
            required=row["required"],
        )
        for row in rows
    ]


def _registrant_ref(request: Request, child_id: str | None) -> RegistrantRef:
    if child_id:
        return RegistrantRef.child(str(request.user.pk), child_id)
    return RegistrantRef.adult(str(request.user.pk))


def _registrant_payload(request: Request) -> dict:
    data = request.data if request.data else request.query_params
    serializer = s.RegistrantInputSerializer(data=data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


class WaiverListView(EnrollmentAPIView):
    """Handler for GET/POST /api/waivers"""

    admin_methods = frozenset({"POST"})

    def get(self, request: Request) -> Response:
        include_archived = request.query_params.get("include_archived") == "true"
        key = waiver_list_cache_key(include_archived)
        payload = cache.get(key)
        if payload is None:
            templates = dependencies.get_waiver_catalog().list_templates(include_archived)
            payload = s.WaiverTemplateSerializer(templates, many=True).data
            cache.set(key, payload, settings.WAIVER_LIST_CACHE_SECONDS)
        return Response(payload)

    def post(self, request: Request) -> Response:
        serializer = s.WaiverTemplateCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        template = dependencies.get_waiver_catalog().create(**serializer.validated_data)
        return Response(s.WaiverTemplateSerializer(template).data, status=status.HTTP_201_CREATED)


class WaiverDetailView(EnrollmentAPIView):
    """Handler for GET /api/waivers/{waiver_id}"""

    def get(self, request: Request, waiver_id: str) -> Response:
        template = dependencies.get_waiver_catalog().get(waiver_id)
        return Response(s.WaiverTemplateSerializer(template).data)


class WaiverArchiveView(EnrollmentAPIView):
    """Handler for POST /api/waivers/{waiver_id}/archive"""

    admin_methods = frozenset({"POST"})

    def post(self, request: Request, waiver_id: str) -> Response:
        template = dependencies.get_waiver_catalog().archive(waiver_id)
        return Response(s.WaiverTemplateSerializer(template).data)


class WaiverVersionView(EnrollmentAPIView):
    """Handler for POST /api/waivers/{waiver_id}/versions"""

    admin_methods = frozenset({"POST"})

    def post(self, request: Request, waiver_id: str) -> Response:
        serializer = s.WaiverRevisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        template = dependencies.get_waiver_catalog().revise(waiver_id, **serializer.validated_data)
        return Response(s.WaiverTemplateSerializer(template).data, status=status.HTTP_201_CREATED)


class WaiverDocumentListView(EnrollmentAPIView):
    """Handler for GET/POST /api/waiver-documents"""

    admin_methods = frozenset({"GET", "POST"})

    def get(self, request: Request) -> Response:
        query = s.DocumentListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        page = dependencies.get_document_library().list(
            kind=DocumentKind(params["type"]),
            page=params["page"],
            limit=params.get("limit", settings.WAIVER_DOCUMENT_PAGE_SIZE),
        )
        return Response(s.DocumentPageSerializer(page).data)

    def post(self, request: Request) -> Response:
        serializer = s.DocumentUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        upload = serializer.validated_data["file"]
        document = dependencies.get_document_library().upload(
            upload.name,
            upload.read(),
            kind=DocumentKind(serializer.validated_data["type"]),
            content_type=upload.content_type or "application/pdf",
        )
        return Response(s.StoredDocumentSerializer(document).data, status=status.HTTP_201_CREATED)


class WaiverDocumentDetailView(EnrollmentAPIView):
    """Handler for DELETE /api/waiver-documents/{key}"""

    admin_methods = frozenset({"DELETE"})

    def delete(self, request: Request, key: str) -> Response:
        dependencies.get_document_library().delete(key)
        return Response(status=status.HTTP_204_NO_CONTENT)


class EventListView(EnrollmentAPIView):
    """Handler for GET/POST /api/events"""

    admin_methods = frozenset({"POST"})

    def get(self, request: Request) -> Response:
        events = dependencies.get_event_service().list_events(
            include_drafts=caller_is_admin(request)
        )
        return Response(s.EventSerializer(events, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = s.EventCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        data["waiver_templates"] = _requirements(data.get("waiver_templates", []))
        event = dependencies.get_event_service().create_event(**data)
        return Response(s.EventAdminSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(EnrollmentAPIView):
    """Handler for GET/PATCH /api/events/{event_id}"""

    admin_methods = frozenset({"PATCH"})

    def get(self, request: Request, event_id: str) -> Response:
        event = dependencies.get_event_service().get_event(event_id)
        if caller_is_admin(request):
            return Response(s.EventAdminSerializer(event).data)
        if event.is_draft:
            raise EventNotFoundError()
        return Response(s.EventSerializer(event).data)

    def patch(self, request: Request, event_id: str) -> Response:
        serializer = s.EventUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        event = dependencies.get_event_service().update_details(
            event_id, **serializer.validated_data
        )
        return Response(s.EventAdminSerializer(event).data)


class EventPublishView(EnrollmentAPIView):
    """Handler for POST /api/events/{event_id}/publish"""

    admin_methods = frozenset({"POST"})

    def post(self, request: Request, event_id: str) -> Response:
        event = dependencies.get_event_service().publish(event_id)
        return Response(s.EventAdminSerializer(event).data)


class EventUnpublishView(EnrollmentAPIView):
    """Handler for POST /api/events/{event_id}/unpublish"""

    admin_methods = frozenset({"POST"})

    def post(self, request: Request, event_id: str) -> Response:
        event = dependencies.get_event_service().unpublish(event_id)
        return Response(s.EventAdminSerializer(event).data)


class EventWaiversView(EnrollmentAPIView):
    """Handler for PUT /api/events/{event_id}/waivers"""

    admin_methods = frozenset({"PUT"})

    def put(self, request: Request, event_id: str) -> Response:
        serializer = s.ReconcileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = dependencies.get_registration_service().reconcile_templates(
            event_id, _requirements(serializer.validated_data["waiver_templates"])
        )
        return Response(s.EventAdminSerializer(event).data)


class RegistrationView(EnrollmentAPIView):
    """Handler for POST/DELETE /api/events/{event_id}/registrations"""

    def post(self, request: Request, event_id: str) -> Response:
        child_id = _registrant_payload(request)["child_id"]
        service = dependencies.get_registration_service()
        if child_id:
            registration_id = service.register_child(event_id, str(request.user.pk), child_id)
        else:
            registration_id = service.register_adult(event_id, str(request.user.pk))
        return Response({"registration_id": str(registration_id)}, status=status.HTTP_201_CREATED)

    def delete(self, request: Request, event_id: str) -> Response:
        ref = _registrant_ref(request, _registrant_payload(request)["child_id"])
        dependencies.get_registration_service().unregister(event_id, ref)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SigningView(EnrollmentAPIView):
    """Handler for POST /api/events/{event_id}/signings"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = s.SigningSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ref = _registrant_ref(request, serializer.validated_data["child_id"])
        result = dependencies.get_registration_service().record_signing(
            event_id, ref, serializer.validated_data["waiver_id"]
        )
        return Response(s.ComplianceStatusSerializer(result).data)


class ComplianceSummaryView(EnrollmentAPIView):
    """Handler for GET /api/events/{event_id}/compliance"""

    admin_methods = frozenset({"GET"})

    def get(self, request: Request, event_id: str) -> Response:
        summary = dependencies.get_registration_service().compliance_summary(event_id)
        return Response(s.ComplianceSummarySerializer(summary).data)


class MyComplianceView(EnrollmentAPIView):
    """Handler for GET /api/events/{event_id}/compliance/me"""

    def get(self, request: Request, event_id: str) -> Response:
        ref = _registrant_ref(request, request.query_params.get("child_id"))
        record, result = dependencies.get_registration_service().registrant_compliance(
            event_id, ref
        )
        return Response(
            {
                "registrant": s.RegistrantSerializer(record).data,
                "compliance": s.ComplianceStatusSerializer(result).data,
            }
        )
