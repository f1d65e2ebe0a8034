from enrollment.handlers.views import (
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

__all__ = [
    "ComplianceSummaryView",
    "EventDetailView",
    "EventListView",
    "EventPublishView",
    "EventUnpublishView",
    "EventWaiversView",
    "MyComplianceView",
    "RegistrationView",
    "SigningView",
    "WaiverArchiveView",
    "WaiverDetailView",
    "WaiverDocumentDetailView",
    "WaiverDocumentListView",
    "WaiverListView",
    "WaiverVersionView",
]
