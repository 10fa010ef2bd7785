"""
DHL Carrier Implementation

Rate lookups against the DHL Express MyDHL API.

One GET /rates call per quote, authenticated with HTTP Basic auth. The
response lists candidate products; the quote is the cheapest billed
currency ("BILLC") total among them.

DHL API Docs:
 - https://developer.dhl.com/api-reference/dhl-express-mydhl-api#reference-docs-section
"""

import base64
import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

import httpx

from dhl_rates import __version__
from dhl_rates.core.config import get_settings
from dhl_rates.core.enums import ShippingDatePolicy
from dhl_rates.core.exceptions import DHLAPIError, DHLRequestError, DHLResponseError
from dhl_rates.schemas.shipping import RateRequest
from dhl_rates.services.shipping.base import BaseCarrier

logger = logging.getLogger(__name__)

BILLED_CURRENCY_TYPE = "BILLC"


def planned_shipping_date(policy: ShippingDatePolicy, today: Optional[date] = None) -> date:
    """Shipping date to quote for

    Args:
        policy: AS_IS quotes for today; SKIP_WEEKENDS moves Saturday and Sunday to Monday
        today: Date to start from (defaults to the current date)
    """
    today = today or date.today()
    if policy == ShippingDatePolicy.SKIP_WEEKENDS:
        if today.weekday() == 5:
            return today + timedelta(days=2)
        if today.weekday() == 6:
            return today + timedelta(days=1)
    return today


def is_customs_declarable(request: RateRequest) -> bool:
    """Explicit override if set, else whether the shipment crosses a border"""
    if request.customs_declarable is not None:
        return request.customs_declarable
    return request.origin_country_code.upper() != request.destination_country_code.upper()


def _flag(value: bool) -> str:
    return "true" if value else "false"


class DHLExpressClient(BaseCarrier):
    """DHL Express rating client."""

    carrier_name = "DHL Express"
    carrier_code = "dhl"

    PRODUCTION_BASE_URL = "https://express.api.dhl.com/mydhlapi"
    SANDBOX_BASE_URL = "https://express.api.dhl.com/mydhlapi/test"

    def __init__(self, connect_timeout: Optional[float] = None, read_timeout: Optional[float] = None):
        """Initialize the DHL Express client

        Args:
            connect_timeout: Seconds to wait for a connection (DHL_CONNECT_TIMEOUT by default)
            read_timeout: Seconds to wait for the response (DHL_READ_TIMEOUT by default)
        """
        settings = get_settings()
        self.connect_timeout = connect_timeout if connect_timeout is not None else settings.DHL_CONNECT_TIMEOUT
        self.read_timeout = read_timeout if read_timeout is not None else settings.DHL_READ_TIMEOUT

    def _get_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.read_timeout, connect=self.connect_timeout)

    def _get_headers(self, request: RateRequest) -> Dict[str, str]:
        """Basic auth, JSON accept and user agent headers"""
        credentials = f"{request.api_key}:{request.api_secret}"
        encoded_credentials = base64.b64encode(credentials.encode()).decode()
        return {
            'Authorization': f'Basic {encoded_credentials}',
            'Accept': 'application/json',
            'User-Agent': f'dhl-rates/{__version__}',
        }

    def build_url(self, request: RateRequest) -> str:
        base_url = self.SANDBOX_BASE_URL if request.sandbox else self.PRODUCTION_BASE_URL
        return f"{base_url}/rates"

    def build_query_params(self, request: RateRequest, today: Optional[date] = None) -> Dict[str, str]:
        """Query parameters for GET /rates. Blank values are left out entirely.

        The planned shipping date starts from today, else request.quote_date,
        else the current date.
        """
        shipping_date = planned_shipping_date(request.shipping_date_policy, today or request.quote_date)
        params = {
            "accountNumber": request.account_number,
            "originCountryCode": request.origin_country_code,
            "originPostalCode": request.origin_postal_code,
            "originCityName": request.origin_city_name,
            "destinationCountryCode": request.destination_country_code,
            "destinationPostalCode": request.destination_postal_code,
            "destinationCityName": request.destination_city_name,
            "weight": round(request.weight, 3),
            "length": round(request.length, 2),
            "width": round(request.width, 2),
            "height": round(request.height, 2),
            "plannedShippingDate": shipping_date.isoformat(),
            "unitOfMeasurement": request.unit_of_measurement.value,
            "isCustomsDeclarable": _flag(is_customs_declarable(request)),
            "nextBusinessDay": _flag(request.next_business_day),
            "requestedCurrencyCode": request.currency,
        }
        return {
            key: str(value) for key, value in params.items()
            if value is not None and str(value).strip()
        }

    async def _fetch_rates(self, request: RateRequest) -> Dict[str, Any]:
        """Call GET /rates and return the decoded body

        Raises:
            DHLAPIError: Non-success HTTP status
            DHLRequestError: Connection failure or timeout
            DHLResponseError: Body is not a JSON object
        """
        url = self.build_url(request)
        params = self.build_query_params(request)

        logger.debug(f"Making GET request to {url}")
        logger.debug(f"Params: {params}")

        try:
            async with httpx.AsyncClient(timeout=self._get_timeout()) as client:
                response = await client.get(
                    url,
                    params=params,
                    headers=self._get_headers(request)
                )
        except httpx.TimeoutException as e:
            raise DHLRequestError(f"DHL request failed: timed out: {e.__class__.__name__}: {e}") from e
        except httpx.RequestError as e:
            raise DHLRequestError(f"DHL request failed: {e.__class__.__name__}: {e}") from e

        if not 200 <= response.status_code < 300:
            raise DHLAPIError(
                f"DHL API error: HTTP {response.status_code}: {str(response.text)[:200]}",
                status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DHLResponseError(f"DHL response is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise DHLResponseError(f"DHL response has unexpected shape: {type(data).__name__}")

        return data

    def select_cheapest_price(self, data: Dict[str, Any], product_code: Optional[str] = None) -> float:
        """Reduce a rates response to its cheapest billed price

        Args:
            data: Decoded /rates response body
            product_code: Only consider products with this code when set

        Returns:
            Minimum BILLC price across the remaining products

        Raises:
            DHLResponseError: No products, none left after filtering, or no billed price
        """
        products = data.get("products")
        if not isinstance(products, list) or not products:
            raise DHLResponseError("DHL response contained no products")

        if product_code:
            products = [p for p in products if isinstance(p, dict) and p.get("productCode") == product_code]
            if not products:
                raise DHLResponseError(f"DHL response contained no products with code {product_code}")

        prices: List[float] = []
        for product in products:
            if not isinstance(product, dict):
                continue
            total_prices = product.get("totalPrice")
            if not isinstance(total_prices, list):
                continue

            billed = next(
                (p for p in total_prices if isinstance(p, dict) and p.get("currencyType") == BILLED_CURRENCY_TYPE),
                None
            )
            if billed is None or billed.get("price") is None:
                continue

            try:
                price = float(billed["price"])
            except (TypeError, ValueError):
                logger.debug(f"Ignoring non-numeric price for product {product.get('productCode')}: {billed['price']}")
                continue

            if price < 0:
                logger.debug(f"Ignoring negative price for product {product.get('productCode')}: {price}")
                continue
            prices.append(price)

        if not prices:
            raise DHLResponseError(f"DHL response contained no {BILLED_CURRENCY_TYPE} price")

        return min(prices)

    async def fetch_cheapest_rate(self, request: RateRequest) -> float:
        data = await self._fetch_rates(request)
        price = self.select_cheapest_price(data, request.product_code)
        logger.debug(f"DHL cheapest rate: {price} {request.currency}")
        return price
