from enrollment.domain.models import (
    DocumentPage,
    Event,
    RegistrantRecord,
    StoredDocument,
    WaiverEntry,
    WaiverRequirement,
    WaiverTemplate,
)
from enrollment.domain.value_objects import (
    Capacity,
    EventId,
    Money,
    RegistrantRef,
    RegistrationId,
    WaiverTemplateId,
)

__all__ = [
    "DocumentPage",
    "Event",
    "RegistrantRecord",
    "StoredDocument",
    "WaiverEntry",
    "WaiverRequirement",
    "WaiverTemplate",
    "EventId",
    "RegistrationId",
    "RegistrantRef",
    "WaiverTemplateId",
    "Money",
    "Capacity",
]
