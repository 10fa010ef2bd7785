"""
Shared enums used across the rate quoting pipeline.
"""

from enum import Enum

class UnitOfMeasurement(str, Enum):
    """Unit system sent to DHL: kg/cm for metric, lb/in for imperial"""
    METRIC = "metric"
    IMPERIAL = "imperial"


class ShippingDatePolicy(str, Enum):
    """How the plannedShippingDate parameter is derived from today's date"""
    AS_IS = "as_is"
    SKIP_WEEKENDS = "skip_weekends"