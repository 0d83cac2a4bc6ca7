"""Webhook signature verification.

Wouaka signs webhook deliveries with HMAC-SHA256. The signature header has
the form ``t=<unix timestamp>,v1=<hex signature>`` and the signed payload is
``"<timestamp>.<raw body>"``.
"""

import hashlib
import hmac
import time
from dataclasses import dataclass

__all__ = [
    "SignatureHeader",
    "WebhookVerification",
    "parse_signature_header",
    "verify_webhook",
    "verify_webhook_signature",
]

DEFAULT_TOLERANCE_SECONDS = 300


@dataclass(frozen=True)
class SignatureHeader:
    timestamp: int
    signature: str


@dataclass(frozen=True)
class WebhookVerification:
    """Outcome of verify_webhook.

    Attributes:
        valid: True when the signature matches and the timestamp is fresh.
        error: Reason for rejection, None when valid.
    """

    valid: bool
    error: str | None = None


def _to_text(payload: str | bytes) -> str:
    return payload.decode("utf-8") if isinstance(payload, bytes) else payload


def _sign(message: str, secret: str) -> str:
    return hmac.new(
        secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def verify_webhook_signature(
    payload: str | bytes, signature: str, secret: str
) -> bool:
    """Check a bare HMAC-SHA256 signature of the payload.

    Uses a constant-time comparison. Never raises; undecodable input is
    reported as an invalid signature.
    """
    try:
        expected = _sign(_to_text(payload), secret)
    except UnicodeDecodeError:
        return False
    return hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8"))


def parse_signature_header(header: str) -> SignatureHeader | None:
    """Parse ``t=<timestamp>,v1=<signature>``.

    Returns:
        SignatureHeader, or None if either part is missing or malformed.
    """
    timestamp = 0
    signature = ""
    for part in header.split(","):
        key, _, value = part.strip().partition("=")
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError:
                return None
        elif key == "v1":
            signature = value

    if not timestamp or not signature:
        return None
    return SignatureHeader(timestamp=timestamp, signature=signature)


def verify_webhook(
    payload: str | bytes,
    signature_header: str,
    secret: str,
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
    now: float | None = None,
) -> WebhookVerification:
    """Verify a webhook delivery with replay protection.

    Args:
        payload: Raw request body exactly as received.
        signature_header: Value of the signature header.
        secret: Webhook signing secret.
        tolerance_seconds: Maximum accepted clock skew / delivery age.
        now: Current epoch seconds (defaults to time.time()).

    Returns:
        WebhookVerification with the outcome.
    """
    parsed = parse_signature_header(signature_header)
    if parsed is None:
        return WebhookVerification(valid=False, error="Invalid signature format")

    current = time.time() if now is None else now
    if abs(int(current) - parsed.timestamp) > tolerance_seconds:
        return WebhookVerification(
            valid=False, error="Timestamp outside tolerance (possible replay)"
        )

    try:
        expected = _sign(f"{parsed.timestamp}.{_to_text(payload)}", secret)
    except UnicodeDecodeError:
        return WebhookVerification(valid=False, error="Payload is not valid UTF-8")

    if hmac.compare_digest(parsed.signature.encode("utf-8"), expected.encode("utf-8")):
        return WebhookVerification(valid=True)
    return WebhookVerification(valid=False, error="Invalid signature")
