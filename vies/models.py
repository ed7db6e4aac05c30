"""Shared data models for the VIES checkVat pipeline."""

from dataclasses import dataclass
from typing import List, Union


@dataclass
class VatInquiry:
    country_code: str  # first two characters of the normalized input
    vat_number: str  # everything after the country code


@dataclass
class ServiceResponse:
    request_date: str = ""
    valid: bool = False
    name: str = ""
    address: str = ""
    error: str = ""  # empty on success

    @classmethod
    def failure(cls, message: str) -> "ServiceResponse":
        """Error-shaped response: message set, every other field at its default."""
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return not self.error

    def as_row(self) -> List[Union[str, bool]]:
        return [self.request_date, self.valid, self.name, self.address, self.error]
