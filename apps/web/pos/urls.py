"""
URL routing for point-of-sale endpoints.
"""

from django.urls import path

from apps.web.pos import views

app_name = "pos"

urlpatterns = [
    path("pos-order", views.pos_order, name="pos-order"),
    path("pos-payment-intent", views.pos_payment_intent, name="pos-payment-intent"),
    path("pos-checkout-link", views.pos_checkout_link, name="pos-checkout-link"),
    path("pos-terminal-intent", views.pos_terminal_intent, name="pos-terminal-intent"),
    path("pos-terminal-status", views.pos_terminal_status, name="pos-terminal-status"),
    path("pos-terminal-cancel", views.pos_terminal_cancel, name="pos-terminal-cancel"),
    path(
        "terminal-connection-token",
        views.terminal_connection_token,
        name="terminal-connection-token",
    ),
]
