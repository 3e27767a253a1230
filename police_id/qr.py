"""
Verification QR codes printed on the ID card.
The code encodes the public verification URL for the member.
"""

import qrcode
from PIL import Image
from io import BytesIO
from flask import current_app, request

DEFAULT_QR_SIZE = 300
MIN_QR_SIZE = 64
MAX_QR_SIZE = 1024


def get_base_url():
    """Configured public URL, falling back to the root of the current request"""
    base_url = current_app.config.get('PUBLIC_BASE_URL')
    if not base_url:
        base_url = request.url_root
    return base_url.rstrip('/')


def build_verification_url(id_number, base_url=None):
    if base_url is None:
        base_url = get_base_url()
    return f"{base_url.rstrip('/')}/verify/{id_number}"


def generate_qr_png(data, size=DEFAULT_QR_SIZE):
    """Render data as a square QR code PNG of size x size pixels"""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    qr_img = qr.make_image(fill_color='black', back_color='white')
    # Nearest keeps module edges sharp for scanners
    qr_img = qr_img.resize((size, size), Image.Resampling.NEAREST)

    buffer = BytesIO()
    qr_img.save(buffer, 'PNG')
    return buffer.getvalue()
