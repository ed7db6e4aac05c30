from unittest.mock import MagicMock, patch

import pytest

SUCCESS_XML = """<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">
  <soap:Body>
    <checkVatResponse xmlns="urn:ec.europa.eu:taxud:vies:services:checkVat:types">
      <countryCode>NL</countryCode>
      <vatNumber>123456789B01</vatNumber>
      <requestDate>2015-03-09+01:00</requestDate>
      <valid>true</valid>
      <name>Acme Corp B.V.</name>
      <address>KERKSTRAAT 001234
1234AB AMSTERDAM</address>
    </checkVatResponse>
  </soap:Body>
</soap:Envelope>"""

FAULT_XML = """<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">
  <soap:Body>
    <soap:Fault>
      <faultcode>soap:Server</faultcode>
      <faultstring>INVALID_INPUT</faultstring>
    </soap:Fault>
  </soap:Body>
</soap:Envelope>"""


def fake_response(status_code: int = 200, text: str = SUCCESS_XML) -> MagicMock:
    r = MagicMock()
    r.status_code = status_code
    r.text = text
    return r


@pytest.fixture
def mock_post():
    with patch("vies.client.requests.post") as post:
        post.return_value = fake_response()
        yield post


@pytest.fixture
def mock_sleep():
    with patch("vies.client.time.sleep") as sleep:
        yield sleep
