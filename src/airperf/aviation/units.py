"""Fuel quantity conversions.

Factors are the flight-manual approximations used on the load sheet, not exact
SI conversions. Results are rounded to two decimals.

Examples:
    >>> litres_to_kg(55.2)
    39.74
    >>> us_gallons_to_litres(10)
    37.8
"""

from airperf.aircraft.constants import LITRES_TO_KG

US_GALLON_TO_LITRES = 3.78
US_GALLON_TO_KG = 2.72
IMPERIAL_GALLON_TO_KG = 3.27


def litres_to_kg(litres: float) -> float:
    """Convert litres of fuel to kilograms."""
    return round(litres * LITRES_TO_KG, 2)


def kg_to_litres(kg: float) -> float:
    """Convert kilograms of fuel to litres."""
    return round(kg / LITRES_TO_KG, 2)


def us_gallons_to_litres(gallons: float) -> float:
    """Convert US gallons to litres."""
    return round(gallons * US_GALLON_TO_LITRES, 2)


def us_gallons_to_kg(gallons: float) -> float:
    """Convert US gallons of fuel to kilograms."""
    return round(gallons * US_GALLON_TO_KG, 2)


def imperial_gallons_to_kg(gallons: float) -> float:
    """Convert imperial gallons of fuel to kilograms."""
    return round(gallons * IMPERIAL_GALLON_TO_KG, 2)
