"""Payment providers - Stripe and Square behind one protocol."""

from django.conf import settings
from foodtruck_schemas import PaymentProviderName

from apps.web.payments.providers.base import PaymentProvider
from apps.web.payments.providers.square import SquarePaymentProvider
from apps.web.payments.providers.stripe import StripePaymentProvider


def get_provider() -> PaymentProvider:
    """
    Build the payment provider selected by the PAYMENT_PROVIDER setting.

    Only "square" selects Square; any other value (or none) selects Stripe.
    A fresh provider is built per call, so callers must ``await close()``.

    Example:
        provider = get_provider()
        try:
            result = await provider.create_terminal_payment(items, 1200, order_id)
        finally:
            await provider.close()
    """
    if settings.PAYMENT_PROVIDER == PaymentProviderName.SQUARE.value:
        return SquarePaymentProvider(
            access_token=settings.SQUARE_ACCESS_TOKEN,
            location_id=settings.SQUARE_LOCATION_ID,
            application_id=settings.SQUARE_APPLICATION_ID,
            environment=settings.SQUARE_ENVIRONMENT,
            webhook_signature_key=settings.SQUARE_WEBHOOK_SIGNATURE_KEY,
            terminal_device_id=settings.SQUARE_TERMINAL_DEVICE_ID,
        )
    return StripePaymentProvider(
        secret_key=settings.STRIPE_SECRET_KEY,
        webhook_secret=settings.STRIPE_WEBHOOK_SECRET,
        publishable_key=settings.STRIPE_PUBLISHABLE_KEY,
    )


__all__ = [
    "PaymentProvider",
    "SquarePaymentProvider",
    "StripePaymentProvider",
    "get_provider",
]
