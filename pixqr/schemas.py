"""Pydantic schemas for API contracts."""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from .pix_encoder import PaymentParameters


class PixPayloadRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    version: str = Field(description="Payload format version, always '01'")
    key: str = Field(min_length=1, description="Payee PIX key")
    city: str = Field(min_length=1)
    name: str = Field(min_length=1)
    value: Decimal | None = Field(default=None, allow_inf_nan=False)
    guid: str | None = None
    message: str | None = None
    cep: str | None = None
    not_repeat_payment: StrictBool | None = Field(default=None, alias="notRepeatPayment")
    currency: int | None = None
    country_code: str | None = Field(default=None, alias="countryCode")

    def to_parameters(self) -> PaymentParameters:
        return PaymentParameters(
            version=self.version,
            key=self.key,
            city=self.city,
            name=self.name,
            value=self.value,
            guid=self.guid,
            message=self.message,
            cep=self.cep,
            not_repeat_payment=self.not_repeat_payment,
            currency=self.currency,
            country_code=self.country_code,
        )


class PixPayloadResponse(BaseModel):
    payload: str
    crc: str
    qr_png_base64: str | None = None
    qr_data_url: str | None = None
