"""QR image renderer for PIX payloads."""
from __future__ import annotations

import base64
import io
from typing import Any

import qrcode
from PIL import Image, ImageDraw, ImageFont

from .config import settings

_ERROR_CORRECTION = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


def generate_qr_image(data: str) -> Image.Image:
    """Plain black-on-white QR code for ``data``."""

    qr = qrcode.QRCode(
        version=None,
        error_correction=_ERROR_CORRECTION[settings.qr_error_correction],
        box_size=settings.qr_box_size,
        border=settings.qr_border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    return qr.make_image(fill_color="black", back_color="white").convert("RGBA")


def add_label_frame(qr_img: Image.Image, title: str) -> Image.Image:
    """Place the QR code on a light canvas with ``title`` printed underneath."""

    width, height = qr_img.size

    label_height = 40
    margin = 40
    canvas_width = width + margin * 2
    canvas_height = height + margin * 2 + label_height

    canvas = Image.new("RGBA", (canvas_width, canvas_height), color="#F5F7FA")
    canvas.paste(qr_img, (margin, margin))

    draw = ImageDraw.Draw(canvas)
    font = ImageFont.load_default()
    text = title.upper()
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    text_x = (canvas_width - (right - left)) // 2
    text_y = margin + height + (label_height - (bottom - top)) // 2
    draw.rectangle(
        [(margin // 2, margin + height), (canvas_width - margin // 2, margin + height + label_height)],
        fill="#FFFFFF",
    )
    draw.text((text_x, text_y), text, fill="#1F2937", font=font)

    return canvas


def qr_image_to_png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def render_qr_payload(payload: str, title: str | None = None) -> dict[str, Any]:
    """Render payload into PNG bytes, base64 string and data URL."""

    image = generate_qr_image(payload)
    if settings.qr_branded:
        image = add_label_frame(image, title or settings.app_name)
    png_bytes = qr_image_to_png_bytes(image)
    png_base64 = base64.b64encode(png_bytes).decode("ascii")
    return {
        "png_bytes": png_bytes,
        "png_base64": png_base64,
        "data_url": f"data:image/png;base64,{png_base64}",
    }


def render_qr_data_url(payload: str) -> str:
    return render_qr_payload(payload)["data_url"]
