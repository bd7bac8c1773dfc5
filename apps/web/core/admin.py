"""Admin registrations for core models."""

from django.contrib import admin

from .models import Blob, Document


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["key", "updated_at"]
    search_fields = ["key"]
    readonly_fields = ["updated_at"]


@admin.register(Blob)
class BlobAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["key", "content_type", "created_at"]
    search_fields = ["key"]
    readonly_fields = ["created_at"]
    exclude = ["content"]
