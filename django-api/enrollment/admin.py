from django.contrib import admin

from enrollment.models import Event, WaiverTemplate


@admin.register(WaiverTemplate)
class WaiverTemplateAdmin(admin.ModelAdmin):
    list_display = ["name", "version", "archived", "created_at"]
    list_filter = ["archived"]
    search_fields = ["name"]
    readonly_fields = [
        "id",
        "name",
        "document_key",
        "document_url",
        "version",
        "archived",
        "created_at",
    ]

    # Signed content is immutable: new content is a new version via the catalog.
    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "location", "starts_at", "capacity", "is_draft", "revision"]
    list_filter = ["is_draft"]
    search_fields = ["title", "location"]
    readonly_fields = ["registered_users", "registered_children", "revision"]

    # Read-only: event writes must go through the revision-checked services.
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
