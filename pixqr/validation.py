"""Field-level checks run before a PIX payload is encoded.

Each ``check_*`` function is pure and returns either :class:`Valid` carrying the
accepted value or :class:`Invalid` carrying the error that would be raised.
:func:`validate_parameters` runs them in order and raises the first failure.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

from .services.errors import ServiceError, err_field_length, err_field_type, err_fixed_value

if TYPE_CHECKING:
    from .pix_encoder import PaymentParameters

T = TypeVar("T")

PAYLOAD_FORMAT_VERSION = "01"
COUNTRY_CODE_LENGTH = 2
CEP_LENGTH = 8


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    error: ServiceError


CheckResult = Union[Valid[T], Invalid]


def check_version(version: Any) -> CheckResult[str]:
    if version != PAYLOAD_FORMAT_VERSION:
        return Invalid(err_fixed_value("version", PAYLOAD_FORMAT_VERSION))
    return Valid(version)


def _check_exact_length(field: str, raw: Any, length: int) -> CheckResult[str | None]:
    if raw is None:
        return Valid(None)
    if not isinstance(raw, str):
        return Invalid(err_field_type(field, "string"))
    if len(raw) != length:
        return Invalid(err_field_length(field, length))
    return Valid(raw)


def check_country_code(country_code: Any) -> CheckResult[str | None]:
    return _check_exact_length("countryCode", country_code, COUNTRY_CODE_LENGTH)


def check_cep(cep: Any) -> CheckResult[str | None]:
    return _check_exact_length("cep", cep, CEP_LENGTH)


def check_value(value: Any) -> CheckResult[Decimal | None]:
    """Accept ints, floats, Decimals and numeric strings; reject anything else."""

    if value is None:
        return Valid(None)
    if isinstance(value, bool):
        return Invalid(err_field_type("value", "number"))
    if isinstance(value, float):
        if not math.isfinite(value):
            return Invalid(err_field_type("value", "number"))
        return Valid(Decimal(str(value)))
    if isinstance(value, (int, Decimal)):
        amount = Decimal(value)
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return Invalid(err_field_type("value", "number"))
    else:
        return Invalid(err_field_type("value", "number"))
    if not amount.is_finite():
        return Invalid(err_field_type("value", "number"))
    return Valid(amount)


def check_not_repeat_payment(flag: Any) -> CheckResult[bool | None]:
    if flag is None or isinstance(flag, bool):
        return Valid(flag)
    return Invalid(err_field_type("notRepeatPayment", "boolean"))


def validate_parameters(parameters: PaymentParameters) -> None:
    """Raise the first validation failure for ``parameters``, if any."""

    results = (
        check_version(parameters.version),
        check_country_code(parameters.country_code),
        check_cep(parameters.cep),
        check_value(parameters.value),
        check_not_repeat_payment(parameters.not_repeat_payment),
    )
    for result in results:
        if isinstance(result, Invalid):
            raise result.error
