"""
Schema exports for the rate quoting pipeline.
"""

from .base import BaseSchema

from .shipping import (
    Address,
    BillableParcel,
    ContentLine,
    RateProfile,
    RateRequest,
    ShipmentPackage,
    StockLocation,
)
