"""
URL routing for booking endpoints.
"""

from django.urls import path

from apps.web.bookings import views

app_name = "bookings"

urlpatterns = [
    path("bookings", views.submit_booking, name="submit"),
    path("admin/bookings", views.admin_bookings, name="admin-bookings"),
]
