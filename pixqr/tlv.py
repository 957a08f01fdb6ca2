"""Helpers to build EMV-style TLV records."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .services.errors import err_oversize_field

MAX_VALUE_LENGTH = 99


@dataclass(frozen=True)
class TLVItem:
    tag: str
    value: str

    def serialize(self) -> str:
        # Length prefix is two decimal digits, counted in characters.
        if len(self.value) > MAX_VALUE_LENGTH:
            raise err_oversize_field(self.tag, len(self.value))
        length = f"{len(self.value):02d}"
        return f"{self.tag}{length}{self.value}"


def build_tlv(items: Iterable[TLVItem]) -> str:
    """Serialize iterable of TLV items into EMV string."""

    return "".join(item.serialize() for item in items)
