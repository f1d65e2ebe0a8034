from django.contrib import admin

from accounts.models import ChildProfile


@admin.register(ChildProfile)
class ChildProfileAdmin(admin.ModelAdmin):
    list_display = ["first_name", "last_name", "parent", "birthday"]
    search_fields = ["first_name", "last_name", "parent__email"]
