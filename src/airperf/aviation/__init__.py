"""Aviation unit helpers."""

from airperf.aviation.units import (
    imperial_gallons_to_kg,
    kg_to_litres,
    litres_to_kg,
    us_gallons_to_kg,
    us_gallons_to_litres,
)

__all__ = [
    "imperial_gallons_to_kg",
    "kg_to_litres",
    "litres_to_kg",
    "us_gallons_to_kg",
    "us_gallons_to_litres",
]
