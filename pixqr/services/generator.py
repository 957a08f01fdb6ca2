"""PIX payload generation service used by the HTTP layer."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from ..monitoring import record_payload_encoded, record_qr_render
from ..pix_encoder import EncodedPayload, PaymentParameters, build_payload
from ..renderer import render_qr_payload

logger = logging.getLogger("pixqr.generator")


@dataclass(slots=True)
class GenerateResult:
    encoded: EncodedPayload
    qr_png_base64: str | None = None
    qr_data_url: str | None = None


class PixGenerator:
    def __init__(self, title: str | None = None):
        self.title = title

    def generate(self, parameters: PaymentParameters, *, render: bool = True) -> GenerateResult:
        encoded = build_payload(parameters)
        record_payload_encoded(bool(parameters.not_repeat_payment))

        if not render:
            return GenerateResult(encoded=encoded)

        rendered = render_qr_payload(encoded.payload, title=self.title)
        record_qr_render()
        logger.info("pix qr rendered", extra={"crc": encoded.crc, "png_bytes": len(rendered["png_bytes"])})
        return GenerateResult(
            encoded=encoded,
            qr_png_base64=rendered["png_base64"],
            qr_data_url=rendered["data_url"],
        )
