"""Serializers for transforming domain models to API responses and parsing input."""

from rest_framework import serializers

from enrollment.services.document_service import DocumentKind


class WaiverTemplateSerializer(serializers.Serializer):
    """Serializer for WaiverTemplate domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    document_key = serializers.CharField()
    document_url = serializers.CharField()
    version = serializers.IntegerField()
    archived = serializers.BooleanField()
    created_at = serializers.DateTimeField()


class WaiverEntrySerializer(serializers.Serializer):
    waiver_id = serializers.UUIDField(source="waiver_id.value")
    signed = serializers.BooleanField()


class WaiverRequirementSerializer(serializers.Serializer):
    waiver_id = serializers.UUIDField(source="waiver_id.value")
    required = serializers.BooleanField()


class RegistrantSerializer(serializers.Serializer):
    """Serializer for RegistrantRecord domain model."""

    id = serializers.UUIDField(source="id.value")
    user_id = serializers.CharField()
    child_id = serializers.CharField(allow_null=True)
    registered_at = serializers.DateTimeField()
    waivers = WaiverEntrySerializer(many=True)


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model, without registrant details."""

    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    description = serializers.CharField()
    location = serializers.CharField()
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    registration_deadline = serializers.DateTimeField()
    capacity = serializers.IntegerField(source="capacity.value")
    occupancy = serializers.IntegerField()
    fee = serializers.DecimalField(source="fee.amount", max_digits=10, decimal_places=2)
    is_draft = serializers.BooleanField()
    images = serializers.ListField(child=serializers.CharField())
    waiver_templates = WaiverRequirementSerializer(many=True)
    revision = serializers.IntegerField()


class EventAdminSerializer(EventSerializer):
    """Event with both registrant collections, for administrators."""

    payment_ref = serializers.CharField(allow_null=True)
    registered_users = RegistrantSerializer(many=True)
    registered_children = RegistrantSerializer(many=True)


class ComplianceStatusSerializer(serializers.Serializer):
    compliant = serializers.BooleanField()
    missing = serializers.SerializerMethodField()

    def get_missing(self, obj) -> list[str]:
        return sorted(str(waiver_id) for waiver_id in obj.missing)


class ComplianceSummarySerializer(serializers.Serializer):
    total_registrants = serializers.IntegerField()
    compliant_count = serializers.IntegerField()
    non_compliant_ids = serializers.SerializerMethodField()

    def get_non_compliant_ids(self, obj) -> list[str]:
        return [str(registration_id) for registration_id in obj.non_compliant_ids]


class StoredDocumentSerializer(serializers.Serializer):
    key = serializers.CharField()
    name = serializers.CharField()
    url = serializers.CharField()
    size = serializers.IntegerField()
    modified_at = serializers.DateTimeField(allow_null=True)


class DocumentPageSerializer(serializers.Serializer):
    items = StoredDocumentSerializer(many=True)
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    total_items = serializers.IntegerField()
    total_pages = serializers.IntegerField()


# Input serializers


class WaiverTemplateCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    document_key = serializers.CharField(max_length=512)
    document_url = serializers.URLField(max_length=1000)


class WaiverRevisionSerializer(serializers.Serializer):
    document_key = serializers.CharField(max_length=512)
    document_url = serializers.URLField(max_length=1000)


class WaiverRequirementInputSerializer(serializers.Serializer):
    waiver_id = serializers.UUIDField()
    required = serializers.BooleanField(default=True)


class ReconcileSerializer(serializers.Serializer):
    waiver_templates = WaiverRequirementInputSerializer(many=True)


class EventCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    location = serializers.CharField(max_length=255)
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    registration_deadline = serializers.DateTimeField()
    capacity = serializers.IntegerField(min_value=0, default=0)
    fee = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, default=0)
    is_draft = serializers.BooleanField(default=True)
    images = serializers.ListField(child=serializers.URLField(), required=False, default=list)
    payment_ref = serializers.CharField(required=False, allow_null=True, default=None)
    waiver_templates = WaiverRequirementInputSerializer(many=True, required=False, default=list)


class EventUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(max_length=255, required=False)
    starts_at = serializers.DateTimeField(required=False)
    ends_at = serializers.DateTimeField(required=False)
    registration_deadline = serializers.DateTimeField(required=False)
    capacity = serializers.IntegerField(min_value=0, required=False)
    fee = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    images = serializers.ListField(child=serializers.URLField(), required=False)
    payment_ref = serializers.CharField(required=False, allow_null=True)


class RegistrantInputSerializer(serializers.Serializer):
    """Identifies the caller themself, or one of their children."""

    child_id = serializers.CharField(required=False, allow_null=True, default=None)


class SigningSerializer(RegistrantInputSerializer):
    waiver_id = serializers.CharField()


class DocumentListQuerySerializer(serializers.Serializer):
    type = serializers.ChoiceField(
        choices=[kind.value for kind in DocumentKind], default=DocumentKind.TEMPLATE.value
    )
    page = serializers.IntegerField(default=1)
    limit = serializers.IntegerField(required=False)


class DocumentUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    type = serializers.ChoiceField(
        choices=[kind.value for kind in DocumentKind], default=DocumentKind.TEMPLATE.value
    )
