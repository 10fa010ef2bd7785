"""
DHL Express shipping calculator

Orchestrates a quote: eligibility, package aggregation, cache lookup and,
on a miss, the DHL rating call plus markup. compute_price() never raises;
any failure means "no rate", and the checkout treats the method as
unavailable for that package.
"""

import logging
from datetime import date
from typing import Optional

from dhl_rates.core.config import get_settings
from dhl_rates.schemas.shipping import (
    Address,
    BillableParcel,
    RateProfile,
    RateRequest,
    ShipmentPackage,
)
from dhl_rates.services.shipping.base import BaseCarrier
from dhl_rates.services.shipping.cache import InMemoryRateCache, RateCache
from dhl_rates.services.shipping.cache_key import build_cache_key
from dhl_rates.services.shipping.carriers.dhl import DHLExpressClient
from dhl_rates.services.shipping.eligibility import is_eligible, resolve_origin
from dhl_rates.services.shipping.package import aggregate_package

logger = logging.getLogger(__name__)


def apply_markup(
    price: Optional[float],
    markup_percent: Optional[float] = None,
    handling_fee: Optional[float] = None
) -> Optional[float]:
    """
    Apply the percentage markup, then the flat handling fee.

    Examples:
        40.00, 10%, 2.00 -> 46.00
        40.00, None, None -> 40.00
    """
    if price is None:
        return None

    if markup_percent:
        price = price * (1 + markup_percent / 100)
    if handling_fee:
        price = price + handling_fee

    return round(price, 2)


def resolve_currency(profile: RateProfile, package: ShipmentPackage) -> str:
    """Profile override, then order currency, then the store default"""
    return profile.currency or package.currency or get_settings().DEFAULT_CURRENCY


class DHLRateCalculator:
    """Computes DHL Express shipping cost for a package."""

    def __init__(
        self,
        carrier: Optional[BaseCarrier] = None,
        cache: Optional[RateCache] = None,
        log: Optional[logging.Logger] = None
    ):
        """Initialize the calculator

        Args:
            carrier: Rating client (a DHLExpressClient by default)
            cache: Quote cache (a process-local InMemoryRateCache by default)
            log: Logger receiving eligibility rejections (the eligibility module logger by default)
        """
        self.carrier = carrier or DHLExpressClient()
        self.cache = cache or InMemoryRateCache()
        self.log = log

    @staticmethod
    def description() -> str:
        return "DHL Express"

    def available(self, profile: RateProfile, package: ShipmentPackage) -> bool:
        return is_eligible(profile, package, self.log)

    def build_request(
        self,
        profile: RateProfile,
        origin: Address,
        destination: Address,
        parcel: BillableParcel,
        currency: str,
        quote_date: Optional[date] = None
    ) -> RateRequest:
        return RateRequest(
            api_key=profile.api_key,
            api_secret=profile.api_secret,
            account_number=profile.account_number,
            origin_country_code=origin.country_iso,
            origin_postal_code=origin.postal_code,
            origin_city_name=origin.city,
            destination_country_code=destination.country_iso,
            destination_postal_code=destination.postal_code,
            destination_city_name=destination.city,
            weight=parcel.weight,
            length=parcel.length,
            width=parcel.width,
            height=parcel.height,
            unit_of_measurement=profile.unit_of_measurement,
            currency=currency,
            sandbox=profile.sandbox,
            product_code=profile.product_code,
            customs_declarable=profile.customs_declarable,
            shipping_date_policy=profile.shipping_date_policy,
            next_business_day=profile.next_business_day,
            quote_date=quote_date,
        )

    async def compute_price(
        self,
        profile: RateProfile,
        package: ShipmentPackage,
        today: Optional[date] = None
    ) -> Optional[float]:
        """
        Quote a package.

        Args:
            profile: Calculator configuration
            package: Package to quote
            today: Date the quote is for, used for both the cache key and the planned shipping date
                (defaults to the current date)

        Returns:
            Price in the resolved currency, or None if the package cannot be quoted
        """
        try:
            if not self.available(profile, package):
                return None

            today = today or date.today()

            origin = resolve_origin(profile, package)
            destination = package.ship_address
            parcel = aggregate_package(package)
            currency = resolve_currency(profile, package)

            cache_key = build_cache_key(profile, origin, destination, parcel, currency, today)

            async def compute() -> Optional[float]:
                request = self.build_request(profile, origin, destination, parcel, currency, today)
                rate = await self.carrier.cheapest_rate(request)
                return apply_markup(rate, profile.markup_percent, profile.handling_fee)

            return await self.cache.fetch_or_compute(cache_key, profile.cache_ttl, compute)

        except Exception as e:
            logger.error(f"[DHL] compute_price failed: {e.__class__.__name__}: {e}")
            logger.debug("compute_price traceback", exc_info=True)
            return None
