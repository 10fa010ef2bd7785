"""
Cache keys for DHL rate quotes.

A key covers every input that can change the quoted price, plus today's
date so quotes roll over at midnight whatever the cache TTL.
"""

from datetime import date
from typing import Any, Optional
from urllib.parse import quote

from dhl_rates.schemas.shipping import Address, BillableParcel, RateProfile

CACHE_NAMESPACE = "dhl_rates/v1/rates"


def _encode(value: Any) -> str:
    # Percent-encoding keeps "/" inside a field from being read as a separator
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return quote(str(value), safe="")


def _customs_flag(value: Optional[bool]) -> str:
    if value is None:
        return "auto"
    return "true" if value else "false"


def build_cache_key(
    profile: RateProfile,
    origin: Address,
    destination: Address,
    parcel: BillableParcel,
    currency: str,
    today: Optional[date] = None
) -> str:
    """Build the cache key for one quote. Identical inputs on the same day give identical keys."""
    today = today or date.today()

    fields = [
        profile.account_number,
        profile.unit_of_measurement.value,
        profile.product_code,
        _customs_flag(profile.customs_declarable),
        profile.stock_location_id if profile.match_stock_location else None,
        profile.sandbox,
        profile.markup_percent,
        profile.handling_fee,
        profile.shipping_date_policy.value,
        profile.next_business_day,
        origin.country_iso,
        origin.postal_code,
        origin.city,
        destination.country_iso,
        destination.postal_code,
        destination.city,
        f"{parcel.weight:.3f}",
        f"{parcel.length:.2f}",
        f"{parcel.width:.2f}",
        f"{parcel.height:.2f}",
        currency,
        today.isoformat(),
    ]

    return "/".join([CACHE_NAMESPACE] + [_encode(field) for field in fields])
