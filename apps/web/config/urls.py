"""
URL configuration for the food truck site.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    # JSON API
    path("api/", include("apps.web.orders.urls")),
    path("api/", include("apps.web.payments.urls")),
    path("api/admin/", include("apps.web.pos.urls")),
    path("api/", include("apps.web.bookings.urls")),
    path("api/", include("apps.web.content.urls")),
]
