from __future__ import annotations

import io

import qrcode


def kiosk_url(base_url: str, location_id: int) -> str:
    return f"{base_url.rstrip('/')}/kiosk/{int(location_id)}"


def qr_png(data: str) -> io.BytesIO:
    """Render `data` as a PNG QR code, ready for send_file."""

    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf
