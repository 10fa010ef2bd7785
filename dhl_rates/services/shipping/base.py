"""
Base Carrier Interface

Defines the abstract base class for carrier rating clients.

A carrier implements fetch_cheapest_rate(), which raises on any failure
so tests can inspect exactly what went wrong. Callers use cheapest_rate(),
which turns every failure into a logged None.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from dhl_rates.core.exceptions import ShippingServiceError
from dhl_rates.schemas.shipping import RateRequest

logger = logging.getLogger(__name__)


class BaseCarrier(ABC):
    """Base class for all shipping carriers"""

    carrier_name = "Generic Carrier"
    carrier_code = "generic"

    @abstractmethod
    async def fetch_cheapest_rate(self, request: RateRequest) -> float:
        """Get the cheapest eligible price for a shipment

        Args:
            request: Shipment and account parameters

        Returns:
            Cheapest price in the requested currency

        Raises:
            ShippingServiceError: If no price could be obtained
        """
        pass

    async def cheapest_rate(self, request: RateRequest) -> Optional[float]:
        """Get the cheapest eligible price, or None if anything goes wrong"""
        try:
            return await self.fetch_cheapest_rate(request)
        except ShippingServiceError as e:
            logger.error(f"[{self.carrier_name}] {e}")
            logger.debug("Rate lookup traceback", exc_info=True)
            return None
        except Exception as e:
            logger.error(f"[{self.carrier_name}] Unexpected rate error: {e.__class__.__name__}: {e}")
            logger.debug("Rate lookup traceback", exc_info=True)
            return None
