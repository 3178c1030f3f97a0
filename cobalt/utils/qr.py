import base64
from io import BytesIO

import qrcode
from PIL import Image

from cobalt.constants import PUBLIC_BASE_URL


def msds_detail_url(msds_id: int) -> str:
    return f"{PUBLIC_BASE_URL.rstrip('/')}/msds/{msds_id}"


def qr_png(value: str, size: int = 300) -> BytesIO:
    qr = qrcode.QRCode(border=2)
    qr.add_data(value)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white").get_image()
    img = img.convert("RGB").resize((size, size), Image.NEAREST)

    buffer = BytesIO()
    img.save(buffer, format="PNG")
    buffer.seek(0)
    return buffer


def qr_data_uri(value: str, size: int = 300) -> str:
    encoded = base64.b64encode(qr_png(value, size).getvalue()).decode()
    return f"data:image/png;base64,{encoded}"
