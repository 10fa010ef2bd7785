"""
Package aggregation.

Collapses a package's content lines into the single parcel DHL rates:
length and width are the largest single item, height stacks every unit.
"""

from dhl_rates.schemas.shipping import BillableParcel, ShipmentPackage

MINIMUM_WEIGHT = 0.1
MINIMUM_DIMENSION = 1.0


def package_weight(package: ShipmentPackage) -> float:
    """Reported package weight, or the 0.1 floor when missing or non-positive"""
    weight = float(package.weight or 0.0)
    return weight if weight > 0 else MINIMUM_WEIGHT


def aggregate_package(package: ShipmentPackage) -> BillableParcel:
    """
    Reduce a package to one billable parcel.

    - length: longest single item depth (items are not laid end to end)
    - width: widest single item
    - height: item heights stacked, once per unit of quantity

    No unit conversion happens here; figures are in whatever unit system
    the profile quotes in.
    """
    length = 0.0
    width = 0.0
    height = 0.0

    for line in package.contents:
        length = max(length, line.depth)
        width = max(width, line.width)
        height += line.height * max(line.quantity, 1)

    return BillableParcel(
        weight=package_weight(package),
        length=length if length > 0 else MINIMUM_DIMENSION,
        width=width if width > 0 else MINIMUM_DIMENSION,
        height=height if height > 0 else MINIMUM_DIMENSION,
    )
