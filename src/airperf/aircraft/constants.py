"""Fixed data for the supported aircraft type.

All masses in kilograms, arms in metres aft of datum, fuel in litres.
These values come from the aircraft's flight manual and are not configurable.
"""

# Fuel
LITRES_TO_KG = 0.72  # Avgas density (kg/L)
FLIGHT_TIME_TO_FUEL_RATE = 18.0  # L/hr
CONTINGENCY_FRACTION = 0.10  # of trip fuel
TAXI_FUEL_LITRES = 3.0
MAX_USABLE_FUEL_LITRES = 120.0
MAX_USABLE_FUEL_WEIGHT = round(MAX_USABLE_FUEL_LITRES * LITRES_TO_KG, 2)

# Load station arms (m)
EMPTY_WEIGHT_ARM = 1.86
PILOT_PASSENGER_ARM = 1.800
FUEL_ARM = 2.209
BAGGAGE_ARM = 2.417

# Limits
CG_FORWARD = 1.841  # m
CG_AFT = 1.978  # m
MAX_TAKEOFF_WEIGHT = 650.0  # kg
MAX_BAGGAGE_WEIGHT = 20.0  # kg
PERFORMANCE_LIMITED_FRACTION = 0.95  # of MTOW

# Performance
STANDARD_QNH_HPA = 1013.0
FEET_PER_HPA = 30.0
PART_135_DISTANCE_FACTOR = 0.85
