"""
Core models - key-value document and blob storage.

Site content and the order/booking collections are stored as whole JSON
documents keyed by logical name. There is no row-level update primitive:
consumers read, modify and write back the entire document.
"""

from django.db import models


class Document(models.Model):
    """A JSON document addressed by a logical key (menu, orders, ...)."""

    key = models.CharField(max_length=100, unique=True)
    data = models.JSONField(null=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["key"]

    def __str__(self) -> str:
        return self.key


class Blob(models.Model):
    """Binary object (uploaded images) addressed by a path-like key."""

    key = models.CharField(max_length=500, unique=True)
    content = models.BinaryField()
    content_type = models.CharField(max_length=100, default="application/octet-stream")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["key"]

    def __str__(self) -> str:
        return self.key
