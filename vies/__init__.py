"""Check EU VAT numbers against the European Commission's VIES service."""

from .client import check_vat, check_vat_service
from .models import ServiceResponse, VatInquiry

__all__ = ["check_vat", "check_vat_service", "ServiceResponse", "VatInquiry"]
