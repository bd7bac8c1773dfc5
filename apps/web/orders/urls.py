"""
URL routing for order endpoints.
"""

from django.urls import path

from apps.web.orders import views

app_name = "orders"

urlpatterns = [
    path("checkout", views.checkout, name="checkout"),
    path("orders", views.order_by_session, name="order-by-session"),
    path("admin/orders", views.admin_orders, name="admin-orders"),
    path("admin/prep-queue", views.prep_queue, name="prep-queue"),
]
