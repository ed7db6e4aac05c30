"""Input normalization for raw VAT numbers."""

import re
from typing import Any, Union

from .models import ServiceResponse, VatInquiry

_NOT_ALNUM = re.compile(r"[^A-Z0-9]")

MIN_LENGTH = 3  # country code + at least one character


def normalize_vat_number(raw: str) -> str:
    """Uppercase and drop everything outside A-Z and 0-9."""
    return _NOT_ALNUM.sub("", raw.upper())


def split_vat_number(raw: Any) -> Union[VatInquiry, ServiceResponse]:
    """
    Split raw input into country code + number.

    Returns a VatInquiry, or an error-shaped ServiceResponse when the input is
    missing or too short. The country code is not checked against the list of
    member states; VIES answers INVALID_INPUT for unknown ones.
    """
    if not isinstance(raw, str):
        return ServiceResponse.failure("Invalid input: VAT number is required")

    normalized = normalize_vat_number(raw)
    if len(normalized) < MIN_LENGTH:
        return ServiceResponse.failure("Invalid VAT number: too short")

    return VatInquiry(country_code=normalized[:2], vat_number=normalized[2:])
