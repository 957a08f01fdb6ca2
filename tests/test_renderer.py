import base64
import io

import pytest
from PIL import Image
from qrcode.exceptions import DataOverflowError

from pixqr.config import settings
from pixqr.renderer import generate_qr_image, render_qr_data_url, render_qr_payload

PAYLOAD = "00020101021126360014BR.GOV.BCB.PIX0114+5511999999999520400005303986" "5802BR5909John Doe6009SAO PAULO63041234"


def test_render_returns_png_in_three_forms():
    rendered = render_qr_payload(PAYLOAD)
    assert rendered["png_bytes"].startswith(b"\x89PNG")
    assert base64.b64decode(rendered["png_base64"]) == rendered["png_bytes"]
    assert rendered["data_url"] == f"data:image/png;base64,{rendered['png_base64']}"


def test_branded_image_is_larger_than_plain_qr():
    plain = generate_qr_image(PAYLOAD)
    branded = Image.open(io.BytesIO(render_qr_payload(PAYLOAD, title="loja")["png_bytes"]))
    assert branded.width == plain.width + 80
    assert branded.height == plain.height + 120


def test_unbranded_image_matches_plain_qr(monkeypatch):
    monkeypatch.setattr(settings, "qr_branded", False)
    plain = generate_qr_image(PAYLOAD)
    rendered = Image.open(io.BytesIO(render_qr_payload(PAYLOAD)["png_bytes"]))
    assert rendered.size == plain.size


def test_data_url_helper():
    assert render_qr_data_url(PAYLOAD).startswith("data:image/png;base64,")


def test_capacity_overflow_propagates():
    with pytest.raises(DataOverflowError):
        render_qr_payload("9" * 8000)
