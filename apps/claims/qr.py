"""
QR payload format and rendering.

A claim's QR code encodes ``"<promotion unique code>:<claim id>"``. The
seller's scanner sends that string back verbatim.
"""

import io
import uuid

import qrcode
from qrcode.constants import ERROR_CORRECT_M

QR_SEPARATOR = ':'


class MalformedPayloadError(ValueError):
    pass


def build_qr_payload(unique_code, claim_id):
    return f"{unique_code}{QR_SEPARATOR}{claim_id}"


def parse_qr_payload(payload):
    """
    Split a scanned payload into ``(unique_code, claim_id)``.

    A bare unique code (no separator) yields ``claim_id=None``.

    Raises:
        MalformedPayloadError: If the payload is empty or the claim id
            is not a UUID
    """
    if not isinstance(payload, str) or not payload.strip():
        raise MalformedPayloadError("Empty QR payload")

    unique_code, separator, claim_part = payload.strip().rpartition(QR_SEPARATOR)
    if not separator:
        return claim_part, None

    if not unique_code:
        raise MalformedPayloadError("Missing promotion code")
    try:
        claim_id = uuid.UUID(claim_part)
    except ValueError:
        raise MalformedPayloadError(f"Invalid claim id: {claim_part!r}")

    return unique_code, claim_id


def render_qr_png(payload, box_size=10, border=4):
    """Render ``payload`` as PNG bytes."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    image = qr.make_image(fill_color='black', back_color='white')
    buffer = io.BytesIO()
    image.save(buffer, format='PNG')
    return buffer.getvalue()
