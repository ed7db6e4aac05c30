"""SOAP envelope building and response parsing for the checkVat operation."""

from typing import Iterator, Optional
from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape

from .errors import ViesParseError
from .models import ServiceResponse, VatInquiry

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
CHECK_VAT_NS = "urn:ec.europa.eu:taxud:vies:services:checkVat:types"

_ENVELOPE = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<SOAP-ENV:Envelope xmlns:SOAP-ENV="{env_ns}" xmlns:ns1="{types_ns}">'
    "<SOAP-ENV:Body>"
    "<ns1:checkVat>"
    "<ns1:countryCode>{country_code}</ns1:countryCode>"
    "<ns1:vatNumber>{vat_number}</ns1:vatNumber>"
    "</ns1:checkVat>"
    "</SOAP-ENV:Body>"
    "</SOAP-ENV:Envelope>"
)

TRUE_VALUES = ("true", "1")


def build_envelope(inquiry: VatInquiry) -> str:
    """Render the SOAP 1.1 checkVat request for one inquiry."""
    return _ENVELOPE.format(
        env_ns=SOAP_ENV_NS,
        types_ns=CHECK_VAT_NS,
        country_code=escape(inquiry.country_code),
        vat_number=escape(inquiry.vat_number),
    )


def local_name(tag: str) -> str:
    """
    Tag without namespace qualification.

    ElementTree reports namespaced tags as ``{uri}name``; a literal
    ``prefix:name`` is handled too.
    """
    return tag.rpartition("}")[2].rpartition(":")[2]


def _children_named(element: ET.Element, name: str) -> Iterator[ET.Element]:
    wanted = name.lower()
    for child in element:
        if isinstance(child.tag, str) and local_name(child.tag).lower() == wanted:
            yield child


def _find_child(element: ET.Element, name: str) -> Optional[ET.Element]:
    return next(_children_named(element, name), None)


def _to_bool(text: str) -> bool:
    return text.strip().lower() in TRUE_VALUES


def _parse_fault(fault: ET.Element) -> ServiceResponse:
    faultstring = _find_child(fault, "faultstring")
    message = faultstring.text if faultstring is not None else None
    return ServiceResponse.failure(message or "SOAP Fault received")


def _parse_check_vat_response(payload: ET.Element) -> ServiceResponse:
    result = ServiceResponse()
    for child in payload:
        if not isinstance(child.tag, str):
            continue
        tag = local_name(child.tag)
        value = child.text or ""
        if tag == "requestDate":
            result.request_date = value
        elif tag == "valid":
            result.valid = _to_bool(value)
        elif tag == "name":
            result.name = value
        elif tag == "address":
            result.address = value
    return result


def parse_response(xml_text: str) -> ServiceResponse:
    """
    Turn a checkVat response body into a ServiceResponse.

    A SOAP Fault becomes an error response carrying its faultstring. Any
    other first Body child is read as checkVatResponse; fields it lacks stay
    at their defaults and unknown fields are ignored.

    Raises ViesParseError when the text is not XML or lacks the envelope
    structure; the exception message is the user-facing error text.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise ViesParseError(f"XML parsing error: {e}") from e

    if root is None:
        raise ViesParseError("Invalid XML response: no root element")

    body = _find_child(root, "body")
    if body is None:
        raise ViesParseError("Invalid XML response: no body element found")

    if len(body) == 0:
        raise ViesParseError("Invalid XML response: empty body element")

    payload = body[0]
    if local_name(payload.tag).lower() == "fault":
        return _parse_fault(payload)
    return _parse_check_vat_response(payload)
