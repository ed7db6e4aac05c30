"""VIES checkVat client."""

import logging
import time
from typing import List, Optional, Union

import requests

from .errors import ViesParseError
from .models import ServiceResponse
from .normalize import split_vat_number
from .soap import build_envelope, parse_response

logger = logging.getLogger(__name__)

VIES_ENDPOINT = "https://ec.europa.eu/taxation_customs/vies/services/checkVatService"
HEADERS = {"Content-Type": "text/xml; charset=utf-8", "SOAPAction": '""'}

# Roughly 60 checks per minute when called in a loop.
RATE_LIMIT_SECONDS = 1.0


def post_envelope(envelope: str, endpoint: str = VIES_ENDPOINT) -> requests.Response:
    """POST a SOAP envelope once. Non-2xx responses are returned, not raised."""
    logger.debug("POST %s", endpoint)
    return requests.post(endpoint, data=envelope.encode("utf-8"), headers=HEADERS)


def check_vat(
    vat_number: object,
    endpoint: str = VIES_ENDPOINT,
    delay: Optional[float] = None,
) -> ServiceResponse:
    """
    Check one VAT number against VIES.

    Never raises: every failure comes back as a ServiceResponse with `error`
    set. Only calls that reach the service's answer (data or SOAP Fault) are
    followed by the rate-limit pause.
    """
    try:
        inquiry = split_vat_number(vat_number)
        if isinstance(inquiry, ServiceResponse):
            logger.warning("Rejected input %r: %s", vat_number, inquiry.error)
            return inquiry

        try:
            r = post_envelope(build_envelope(inquiry), endpoint)
        except requests.RequestException as e:
            logger.warning("VIES request failed: %s", e)
            return ServiceResponse.failure(f"Network error: {e}")

        logger.debug(
            "VIES answered %s for %s%s",
            r.status_code,
            inquiry.country_code,
            inquiry.vat_number,
        )
        if r.status_code != 200:
            return ServiceResponse.failure(
                f"HTTP error {r.status_code}: Service unavailable"
            )

        xml_text = r.text
        if not xml_text:
            return ServiceResponse.failure("Empty response from service")

        try:
            result = parse_response(xml_text)
        except ViesParseError as e:
            logger.warning("Unreadable VIES response: %s", e)
            return ServiceResponse.failure(str(e))

        time.sleep(RATE_LIMIT_SECONDS if delay is None else delay)

        if not result.ok:
            logger.warning(
                "VIES fault for %s%s: %s",
                inquiry.country_code,
                inquiry.vat_number,
                result.error,
            )
        return result

    except Exception as e:
        logger.exception("Unexpected error while checking %r", vat_number)
        return ServiceResponse.failure(f"Unexpected error: {e}")


def check_vat_service(vat_number: object) -> List[List[Union[str, bool]]]:
    """
    Check validity of a VAT number of a company registered in the EU.

    `vat_number` includes the country code, e.g. "NL123456789B01"; spaces and
    punctuation are ignored. Returns a single row:
    [request_date, valid, name, address, error].
    """
    return [check_vat(vat_number).as_row()]
