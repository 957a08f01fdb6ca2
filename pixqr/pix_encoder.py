"""PIX (BR Code) payload encoder on top of EMV TLV records."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Callable, Iterator

from .crc import crc16_ccitt
from .renderer import render_qr_data_url
from .services.errors import ServiceError
from .tlv import TLVItem, build_tlv
from .validation import Invalid, check_value, validate_parameters

logger = logging.getLogger("pixqr.encoder")

PIX_GUI = "BR.GOV.BCB.PIX"
MERCHANT_CATEGORY_CODE = "0000"
DEFAULT_CURRENCY = "986"
DEFAULT_COUNTRY_CODE = "BR"
POI_STATIC = "11"
POI_DYNAMIC = "12"
CRC_PREFIX = "6304"

TAG_PAYLOAD_FORMAT = "00"
TAG_POINT_OF_INITIATION = "01"
TAG_MERCHANT_ACCOUNT = "26"
TAG_MERCHANT_CATEGORY = "52"
TAG_CURRENCY = "53"
TAG_AMOUNT = "54"
TAG_COUNTRY_CODE = "58"
TAG_MERCHANT_NAME = "59"
TAG_MERCHANT_CITY = "60"
TAG_POSTAL_CODE = "61"
TAG_ADDITIONAL_DATA = "62"

# Sub-tags inside the merchant account (26) and additional data (62) records.
TAG_GUI = "00"
TAG_KEY = "01"
TAG_DESCRIPTION = "02"
TAG_REFERENCE_LABEL = "05"

Renderer = Callable[[str], str]


@dataclass(frozen=True)
class PaymentParameters:
    version: str
    key: str
    city: str
    name: str
    value: int | float | Decimal | str | None = None
    guid: str | None = None
    message: str | None = None
    cep: str | None = None
    not_repeat_payment: bool | None = None
    currency: int | str | None = None
    country_code: str | None = None


@dataclass(frozen=True)
class EncodedPayload:
    payload: str
    crc: str


@dataclass(frozen=True)
class PixCode:
    """Result of :func:`encode`: the payload string plus lazy image rendering."""

    encoded: EncodedPayload
    renderer: Renderer = field(default=render_qr_data_url, repr=False)

    def payload(self) -> str:
        return self.encoded.payload

    def image(self) -> str:
        return self.renderer(self.encoded.payload)


def build_merchant_account_info(key: str, message: str | None = None) -> str:
    """Value of tag 26: GUI, payee key and optional description."""

    items = [TLVItem(tag=TAG_GUI, value=PIX_GUI), TLVItem(tag=TAG_KEY, value=key)]
    if message:
        items.append(TLVItem(tag=TAG_DESCRIPTION, value=message))
    return build_tlv(items)


def build_additional_data(guid: str) -> str:
    """Value of tag 62: the reference label carrying the transaction id."""

    return build_tlv([TLVItem(tag=TAG_REFERENCE_LABEL, value=guid)])


def format_amount(value: int | float | Decimal | str) -> str:
    result = check_value(value)
    if isinstance(result, Invalid):
        raise result.error
    amount = result.value
    # Precision must cover every integer digit plus the two cents.
    with localcontext() as ctx:
        ctx.prec = max(28, amount.adjusted() + 3)
        return str(amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def payload_items(parameters: PaymentParameters) -> Iterator[TLVItem]:
    """Yield top-level records in the fixed EMV order, skipping absent ones."""

    poi = POI_DYNAMIC if parameters.not_repeat_payment else POI_STATIC
    yield TLVItem(tag=TAG_PAYLOAD_FORMAT, value=parameters.version)
    yield TLVItem(tag=TAG_POINT_OF_INITIATION, value=poi)
    yield TLVItem(
        tag=TAG_MERCHANT_ACCOUNT,
        value=build_merchant_account_info(parameters.key, parameters.message),
    )
    yield TLVItem(tag=TAG_MERCHANT_CATEGORY, value=MERCHANT_CATEGORY_CODE)
    currency = DEFAULT_CURRENCY if parameters.currency in (None, "") else str(parameters.currency)
    yield TLVItem(tag=TAG_CURRENCY, value=currency)
    if parameters.value is not None:
        yield TLVItem(tag=TAG_AMOUNT, value=format_amount(parameters.value))
    country_code = (parameters.country_code or DEFAULT_COUNTRY_CODE).upper()
    yield TLVItem(tag=TAG_COUNTRY_CODE, value=country_code)
    yield TLVItem(tag=TAG_MERCHANT_NAME, value=parameters.name)
    yield TLVItem(tag=TAG_MERCHANT_CITY, value=parameters.city.upper())
    if parameters.cep is not None:
        yield TLVItem(tag=TAG_POSTAL_CODE, value=parameters.cep)
    if parameters.guid:
        yield TLVItem(tag=TAG_ADDITIONAL_DATA, value=build_additional_data(parameters.guid))


def build_payload(parameters: PaymentParameters) -> EncodedPayload:
    """Validate, assemble the TLV sequence and append the CRC trailer."""

    try:
        validate_parameters(parameters)
        payload_no_crc = build_tlv(payload_items(parameters))
    except ServiceError as exc:
        logger.info("pix payload rejected", extra={"code": exc.code, "field": exc.field})
        raise

    crc_input = f"{payload_no_crc}{CRC_PREFIX}"
    crc = crc16_ccitt(crc_input)
    final_payload = f"{crc_input}{crc}"
    logger.debug("pix payload encoded", extra={"crc": crc, "length": len(final_payload)})
    return EncodedPayload(payload=final_payload, crc=crc)


def encode(parameters: PaymentParameters, renderer: Renderer = render_qr_data_url) -> PixCode:
    return PixCode(encoded=build_payload(parameters), renderer=renderer)
