from django.urls import path

from enrollment.handlers import (
    ComplianceSummaryView,
    EventDetailView,
    EventListView,
    EventPublishView,
    EventUnpublishView,
    EventWaiversView,
    MyComplianceView,
    RegistrationView,
    SigningView,
    WaiverArchiveView,
    WaiverDetailView,
    WaiverDocumentDetailView,
    WaiverDocumentListView,
    WaiverListView,
    WaiverVersionView,
)

urlpatterns = [
    path("waivers", WaiverListView.as_view(), name="waiver-list"),
    path("waivers/<str:waiver_id>", WaiverDetailView.as_view(), name="waiver-detail"),
    path(
        "waivers/<str:waiver_id>/archive",
        WaiverArchiveView.as_view(),
        name="waiver-archive",
    ),
    path(
        "waivers/<str:waiver_id>/versions",
        WaiverVersionView.as_view(),
        name="waiver-versions",
    ),
    path("waiver-documents", WaiverDocumentListView.as_view(), name="waiver-document-list"),
    path(
        "waiver-documents/<path:key>",
        WaiverDocumentDetailView.as_view(),
        name="waiver-document-detail",
    ),
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/publish", EventPublishView.as_view(), name="event-publish"),
    path(
        "events/<str:event_id>/unpublish",
        EventUnpublishView.as_view(),
        name="event-unpublish",
    ),
    path("events/<str:event_id>/waivers", EventWaiversView.as_view(), name="event-waivers"),
    path(
        "events/<str:event_id>/registrations",
        RegistrationView.as_view(),
        name="event-registrations",
    ),
    path("events/<str:event_id>/signings", SigningView.as_view(), name="event-signings"),
    path(
        "events/<str:event_id>/compliance",
        ComplianceSummaryView.as_view(),
        name="event-compliance",
    ),
    path(
        "events/<str:event_id>/compliance/me",
        MyComplianceView.as_view(),
        name="event-compliance-me",
    ),
]
