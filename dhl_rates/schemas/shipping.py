"""
Shipping Schemas

Data models flowing through the rate quoting pipeline:

- RateProfile: operator-maintained carrier configuration, read-only at quote time
- ShipmentPackage: the order's destination, contents and optional stock location
- BillableParcel: the single weight/dimension tuple sent to DHL
- RateRequest: everything one outbound rating call needs
"""

from datetime import date
from typing import List, Optional

from pydantic import Field, field_validator

from dhl_rates.core.config import Settings, get_settings
from dhl_rates.core.enums import ShippingDatePolicy, UnitOfMeasurement
from dhl_rates.schemas.base import AddressSchema, BaseSchema, blank_to_none


class Address(AddressSchema):
    """Destination or origin address as far as rating is concerned"""
    pass


class StockLocation(AddressSchema):
    """Warehouse a package ships from"""
    id: Optional[str] = None

    @field_validator('id', mode='before')
    @classmethod
    def stringify_id(cls, v):
        # ORM primary keys arrive as ints
        if isinstance(v, int):
            return str(v)
        return blank_to_none(v)


class ContentLine(BaseSchema):
    """One content line of a package: the variant's dimensions and how many units"""
    depth: float = 0.0
    width: float = 0.0
    height: float = 0.0
    quantity: int = 1

    @field_validator('depth', 'width', 'height', mode='before')
    @classmethod
    def missing_dimension_is_zero(cls, v):
        return 0.0 if v is None else v


class ShipmentPackage(BaseSchema):
    """A package awaiting a quote. Never mutated by the pipeline."""
    ship_address: Optional[Address] = None
    currency: Optional[str] = None
    weight: float = 0.0
    contents: List[ContentLine] = Field(default_factory=list)
    stock_location: Optional[StockLocation] = None

    normalize_blanks = field_validator('currency', mode='before')(blank_to_none)


class BillableParcel(BaseSchema):
    """Aggregated parcel. Units follow the profile's unit of measurement."""
    weight: float = Field(gt=0)
    length: float = Field(gt=0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class RateProfile(BaseSchema):
    """
    DHL Express calculator configuration.

    Optional strings are normalized so that blank and missing mean the same
    thing; whether the profile can quote at all is decided by the
    eligibility check, not here.
    """
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    account_number: Optional[str] = None

    origin_country_code: Optional[str] = None
    origin_postal_code: Optional[str] = None
    origin_city_name: Optional[str] = None

    unit_of_measurement: UnitOfMeasurement = UnitOfMeasurement.METRIC
    currency: Optional[str] = None
    sandbox: bool = False

    product_code: Optional[str] = None
    customs_declarable: Optional[bool] = None

    minimum_weight: Optional[float] = None
    maximum_weight: Optional[float] = None

    markup_percent: Optional[float] = None
    handling_fee: Optional[float] = None

    cache_ttl: int = Field(default_factory=lambda: get_settings().DHL_RATE_CACHE_TTL)

    shipping_date_policy: ShippingDatePolicy = ShippingDatePolicy.SKIP_WEEKENDS
    next_business_day: bool = False

    match_stock_location: bool = False
    stock_location_id: Optional[str] = None

    normalize_blanks = field_validator(
        'api_key', 'api_secret', 'account_number',
        'origin_country_code', 'origin_postal_code', 'origin_city_name',
        'currency', 'product_code', 'stock_location_id',
        mode='before'
    )(blank_to_none)

    @field_validator('unit_of_measurement', mode='before')
    @classmethod
    def lowercase_unit(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('stock_location_id', mode='before')
    @classmethod
    def stringify_stock_location_id(cls, v):
        if isinstance(v, int):
            return str(v)
        return v

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **overrides) -> "RateProfile":
        """Build a profile from the DHL_* settings, with keyword overrides on top"""
        settings = settings or get_settings()
        values = {
            "api_key": settings.DHL_API_KEY,
            "api_secret": settings.DHL_API_SECRET,
            "account_number": settings.DHL_ACCOUNT_NUMBER,
            "origin_country_code": settings.DHL_ORIGIN_COUNTRY_CODE,
            "origin_postal_code": settings.DHL_ORIGIN_POSTAL_CODE,
            "origin_city_name": settings.DHL_ORIGIN_CITY_NAME,
            "unit_of_measurement": settings.DHL_UNIT_OF_MEASUREMENT,
            "currency": settings.DHL_CURRENCY,
            "sandbox": settings.DHL_TEST_MODE,
            "cache_ttl": settings.DHL_RATE_CACHE_TTL,
        }
        values.update(overrides)
        return cls(**values)


class RateRequest(BaseSchema):
    """Parameters for a single DHL rating call"""
    api_key: str
    api_secret: str
    account_number: str

    origin_country_code: str
    origin_postal_code: str
    origin_city_name: Optional[str] = None
    destination_country_code: str
    destination_postal_code: Optional[str] = None
    destination_city_name: Optional[str] = None

    weight: float
    length: float
    width: float
    height: float

    unit_of_measurement: UnitOfMeasurement = UnitOfMeasurement.METRIC
    currency: str = "USD"
    sandbox: bool = False

    product_code: Optional[str] = None
    customs_declarable: Optional[bool] = None
    shipping_date_policy: ShippingDatePolicy = ShippingDatePolicy.SKIP_WEEKENDS
    next_business_day: bool = False
    # Day the quote is for; the planned shipping date is derived from it
    quote_date: Optional[date] = None
