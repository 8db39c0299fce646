# =============================================================================
# File: waitlist/qr.py
# Purpose: Render QR codes pointing at the public pages as PNG data URLs.
# =============================================================================
from __future__ import annotations

import base64
import io

import qrcode
from qrcode.constants import ERROR_CORRECT_M

QR_DARK = "#17FB15"
QR_LIGHT = "#000000"
QR_BORDER = 2
QR_BOX_SIZE = 10


def qr_data_url(url: str) -> str:
    """Return `data:image/png;base64,...` for a QR code encoding `url`."""
    qr = qrcode.QRCode(
        error_correction=ERROR_CORRECT_M,
        box_size=QR_BOX_SIZE,
        border=QR_BORDER,
    )
    qr.add_data(url)
    qr.make(fit=True)
    img = qr.make_image(fill_color=QR_DARK, back_color=QR_LIGHT)

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    encoded = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
