"""Shared service error definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, eq=False)
class ServiceError(Exception):
    code: str
    message: str
    status_code: int = 400
    field: str | None = None

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code}: {self.message}"


class FixedValueViolation(ServiceError):
    """A field that only admits one literal value got something else."""


class FieldLengthViolation(ServiceError):
    """A fixed-width field has the wrong number of characters."""


class FieldTypeViolation(ServiceError):
    """A field could not be read as the expected type."""


class OversizeFieldDefect(ServiceError):
    """A TLV value does not fit the two-digit length prefix."""


def err_fixed_value(field: str, expected: str, message: str | None = None) -> FixedValueViolation:
    return FixedValueViolation(
        code="ERR_FIXED_VALUE",
        message=message or f"{field} is fixed '{expected}'",
        status_code=422,
        field=field,
    )


def err_field_length(field: str, length: int, message: str | None = None) -> FieldLengthViolation:
    return FieldLengthViolation(
        code="ERR_FIELD_LENGTH",
        message=message or f"{field}: {length} characters",
        status_code=422,
        field=field,
    )


def err_field_type(field: str, expected: str, message: str | None = None) -> FieldTypeViolation:
    return FieldTypeViolation(
        code="ERR_FIELD_TYPE",
        message=message or f"{field} must be a valid {expected}",
        status_code=422,
        field=field,
    )


def err_oversize_field(tag: str, length: int, message: str | None = None) -> OversizeFieldDefect:
    return OversizeFieldDefect(
        code="ERR_FIELD_OVERSIZE",
        message=message or f"tag {tag} value has {length} characters, at most 99 fit the length prefix",
        status_code=422,
        field=tag,
    )
