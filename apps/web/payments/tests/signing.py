"""Webhook signatures built the way Stripe and Square sign them."""

import base64
import hashlib
import hmac
import json
import time


def stripe_signature(
    payload: bytes, secret: str = "whsec_test123", timestamp: int | None = None
) -> str:
    """Stripe-Signature header: t=<unix>,v1=hex(HMAC-SHA256(secret, "<t>.<body>"))."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.".encode() + payload
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def square_signature(payload: bytes, url: str, key: str = "sq_signature_key") -> str:
    """x-square-hmacsha256-signature: base64(HMAC-SHA256(key, url + body))."""
    digest = hmac.new(key.encode(), url.encode() + payload, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def stripe_event(event_type: str, obj: dict) -> bytes:
    return json.dumps(
        {"id": "evt_test", "object": "event", "type": event_type, "data": {"object": obj}}
    ).encode()
