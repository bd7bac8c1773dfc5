"""
URL routing for payment endpoints.
"""

from django.urls import path

from apps.web.payments import views, webhooks

app_name = "payments"

urlpatterns = [
    path("payment-config", views.payment_config, name="payment-config"),
    path("webhooks/provider", webhooks.provider_webhook, name="provider-webhook"),
    # Endpoint registered with Stripe before Square support existed
    path("webhooks/stripe", webhooks.provider_webhook, name="stripe-webhook"),
]
