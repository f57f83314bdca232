# Earth radius in various units
EARTH_RADIUS_KM = 6371.0
EARTH_RADIUS_METERS = 6371000.0

# Multipliers from kilometers to each distance unit (haversine output)
KM_TO_UNIT = {
    "km": 1.0,
    "m": 1000.0,
    "mi": 0.621371,
    "ft": 3280.84,
}

# Length of one unit in meters (meters are the pivot for unit conversion)
METERS_PER_UNIT = {
    "km": 1000.0,
    "m": 1.0,
    "mi": 1609.34,
    "ft": 0.3048,
}

# Thresholds at which formatted distances switch to the larger unit
METERS_PER_KILOMETER = 1000
FEET_PER_MILE = 5280

# Average travel speeds (km/h)
TRAVEL_SPEED_WALKING = 5.0
TRAVEL_SPEED_CYCLING = 15.0
TRAVEL_SPEED_DRIVING = 40.0
TRAVEL_SPEED_TRANSIT = 25.0

TRAVEL_SPEEDS = {
    "walking": TRAVEL_SPEED_WALKING,
    "cycling": TRAVEL_SPEED_CYCLING,
    "driving": TRAVEL_SPEED_DRIVING,
    "transit": TRAVEL_SPEED_TRANSIT,
}

# Traffic factors for different times of day
# These are multipliers applied to the base travel time
TRAFFIC_FACTORS = {
    "early_morning": 0.8,  # 5am-7am: Light traffic
    "morning_rush": 1.5,  # 7am-9am: Heavy traffic
    "mid_day": 1.0,  # 9am-4pm: Normal traffic
    "evening_rush": 1.6,  # 4pm-7pm: Heavy traffic
    "evening": 0.9,  # 7pm-11pm: Light traffic
    "night": 0.7,  # 11pm-5am: Very light traffic
}

# Only road traffic slows these modes down
TRAFFIC_SENSITIVE_MODES = ("driving", "transit")
