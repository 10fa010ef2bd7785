"""
Eligibility checks for the DHL Express calculator.

Decides, without any network access, whether a profile may quote a package.
Every rejection is logged; nothing is raised to the caller.
"""

import logging
from typing import Optional

from dhl_rates.schemas.shipping import Address, RateProfile, ShipmentPackage
from dhl_rates.services.shipping.package import package_weight

logger = logging.getLogger(__name__)


def _missing_preferences(profile: RateProfile) -> list:
    required = {
        "api_key": profile.api_key,
        "api_secret": profile.api_secret,
        "account_number": profile.account_number,
    }
    if profile.match_stock_location:
        required["stock_location_id"] = profile.stock_location_id
    else:
        required["origin_country_code"] = profile.origin_country_code
        required["origin_postal_code"] = profile.origin_postal_code

    return [name for name, value in required.items() if not value or not str(value).strip()]


def weight_bounds_conflict(profile: RateProfile) -> bool:
    """True when both weight bounds are set and the minimum exceeds the maximum"""
    return (
        profile.minimum_weight is not None
        and profile.maximum_weight is not None
        and profile.minimum_weight > profile.maximum_weight
    )


def resolve_origin(profile: RateProfile, package: ShipmentPackage) -> Address:
    """The address a package ships from: its matched stock location, or the profile origin"""
    if profile.match_stock_location and package.stock_location is not None:
        location = package.stock_location
        return Address(
            country_iso=location.country_iso,
            postal_code=location.postal_code,
            city=location.city,
        )

    return Address(
        country_iso=profile.origin_country_code,
        postal_code=profile.origin_postal_code,
        city=profile.origin_city_name,
    )


def is_eligible(
    profile: RateProfile,
    package: ShipmentPackage,
    log: Optional[logging.Logger] = None
) -> bool:
    """
    Check whether this profile should attempt a quote for this package.

    Checks run in order and the first failure wins:
        1. credentials, account number and origin (or stock location id) are set
        2. weight bounds are not contradictory (a configuration error)
        3. the package ships from the pinned stock location, when pinning is on
        4. the package has a ship address with a country ISO
        5. the package weight lies within the configured bounds

    Args:
        profile: Calculator configuration
        package: Package to quote
        log: Logger receiving the rejection reasons (module logger by default)

    Returns:
        True only if every check passes
    """
    log = log or logger

    missing = _missing_preferences(profile)
    if missing:
        log.debug(f"[DHL] Not available: missing preferences {', '.join(missing)}")
        return False

    if weight_bounds_conflict(profile):
        log.warning(
            f"[DHL] Misconfigured profile: minimum_weight {profile.minimum_weight} "
            f"is greater than maximum_weight {profile.maximum_weight}"
        )
        return False

    if profile.match_stock_location:
        location = package.stock_location
        if location is None or location.id != profile.stock_location_id:
            log.debug(
                f"[DHL] Not available: package stock location "
                f"{location.id if location else None} does not match {profile.stock_location_id}"
            )
            return False
        if not location.country_iso or not location.postal_code:
            log.debug(f"[DHL] Not available: stock location {location.id} has no country or postal code")
            return False

    address = package.ship_address
    if address is None:
        log.debug("[DHL] Not available: package has no ship address")
        return False
    if not address.country_iso:
        log.debug("[DHL] Not available: ship address has no country ISO")
        return False

    weight = package_weight(package)
    if profile.minimum_weight is not None and weight < profile.minimum_weight:
        log.debug(f"[DHL] Not available: weight {weight} below minimum {profile.minimum_weight}")
        return False
    if profile.maximum_weight is not None and weight > profile.maximum_weight:
        log.debug(f"[DHL] Not available: weight {weight} above maximum {profile.maximum_weight}")
        return False

    return True
