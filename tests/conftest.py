# tests/conftest.py
import pytest

from dhl_rates.core.config import Settings, clear_settings_cache
from dhl_rates.schemas.shipping import (
    Address,
    ContentLine,
    RateProfile,
    RateRequest,
    ShipmentPackage,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make sure no test sees settings cached by another"""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings():
    """Provide test settings"""
    return Settings(
        DHL_API_KEY="testuser",
        DHL_API_SECRET="testpass",
        DHL_ACCOUNT_NUMBER="123456789",
        DHL_ORIGIN_COUNTRY_CODE="US",
        DHL_ORIGIN_POSTAL_CODE="10001",
        DHL_ORIGIN_CITY_NAME="New York",
        DHL_TEST_MODE=True,
        DEFAULT_CURRENCY="EUR",
    )


@pytest.fixture
def profile():
    """A fully configured profile shipping from New York"""
    return RateProfile(
        api_key="testuser",
        api_secret="testpass",
        account_number="123456789",
        origin_country_code="US",
        origin_postal_code="10001",
        origin_city_name="New York",
        cache_ttl=600,
    )


@pytest.fixture
def package():
    """One 10x5x3 item going to Berlin, order in USD"""
    return ShipmentPackage(
        ship_address=Address(country_iso="DE", postal_code="10115", city="Berlin"),
        currency="USD",
        weight=1.5,
        contents=[ContentLine(depth=10.0, width=5.0, height=3.0, quantity=1)],
    )


@pytest.fixture
def rate_request():
    """Provide a sandbox rate request matching the profile and package fixtures"""
    return RateRequest(
        api_key="testuser",
        api_secret="testpass",
        account_number="123456789",
        origin_country_code="US",
        origin_postal_code="10001",
        origin_city_name="New York",
        destination_country_code="DE",
        destination_postal_code="10115",
        destination_city_name="Berlin",
        weight=1.5,
        length=10.0,
        width=5.0,
        height=3.0,
        currency="USD",
        sandbox=True,
    )


@pytest.fixture
def rates_response():
    """Two products whose billed prices are 45.00 and 38.50"""
    return {
        "products": [
            {
                "productCode": "P",
                "productName": "EXPRESS WORLDWIDE",
                "totalPrice": [
                    {"currencyType": "PULC", "price": 30.00},
                    {"currencyType": "BILLC", "price": 45.00},
                ],
            },
            {
                "productCode": "D",
                "productName": "EXPRESS WORLDWIDE",
                "totalPrice": [
                    {"currencyType": "PULC", "price": 20.00},
                    {"currencyType": "BILLC", "price": 38.50},
                ],
            },
        ]
    }


@pytest.fixture
def mock_httpx(mocker):
    """
    Patch httpx.AsyncClient and return a helper that sets the response.

    Usage: http = mock_httpx(status_code=200, json_data={...}); http.get.call_args
    """
    mock_client = mocker.patch("httpx.AsyncClient")
    session = mock_client.return_value.__aenter__.return_value

    def _respond(status_code=200, json_data=None, text=""):
        mock_response = mocker.MagicMock()
        mock_response.status_code = status_code
        mock_response.text = text
        if isinstance(json_data, Exception):
            mock_response.json.side_effect = json_data
        else:
            mock_response.json.return_value = json_data
        session.get.return_value = mock_response
        return session

    return _respond
