"""
Application-wide constants for the Zero-Hydro simulation engine.

This module defines calibration values shared between the physical models,
the simulation driver and the sync policy. Species curve parameters live in
algorithms/species.py next to the curves that use them.
"""

# Thermal model (air-to-water relaxation)
WATER_TEMP_MIN = 3.0  # °C
WATER_TEMP_MAX = 26.5  # °C
SOLAR_PHASE_DAY = 172  # Summer solstice reference (day of year)
SOLAR_CORRECTION_SCALE = 10.0
THERMAL_MU_BASE = 0.15
RIVER_TIME_CONSTANT = 12.0  # hours
CLOSED_WATER_COEF = 0.207
CLOSED_WATER_EXPONENT = 1.35
DEFAULT_MEAN_DEPTH = 5.0  # m

# Monthly climatological water temperature (°C), January = index 0
MONTHLY_WATER_TEMP_BASELINE = (
    5.5, 6.0, 9.0, 12.0, 16.0, 19.5,
    21.0, 21.5, 19.0, 14.5, 10.5, 7.5,
)

# Turbidity model
TURBIDITY_MIN = 0.0  # NTU
TURBIDITY_MAX = 100.0  # NTU
TURBIDITY_DAILY_DECAY = 0.77
RAIN_THRESHOLD = 0.1  # mm
RAIN_TURBIDITY_COEF = 1.8  # NTU per mm
TURBIDITY_INDEX_SCALE = 80.0  # NTU mapped to turbidity index 1.0

# Oxygen model (saturation polynomial at 1 atm)
STANDARD_PRESSURE = 1013.25  # hPa
DO_COEF_0 = 14.652
DO_COEF_1 = 0.41022
DO_COEF_2 = 0.007991
DO_COEF_3 = 0.000077774

# Wave model
WAVE_WIND_FLOOR = 5.0  # km/h
WAVE_RESIDUAL_CHOP = 1.0  # cm
WAVE_GROWTH_COEF = 0.0016
WAVE_EMPIRICAL_FACTOR = 0.8
GRAVITY = 9.81  # m/s²
DEFAULT_SURFACE_AREA = 100000.0  # m²
DEFAULT_SHAPE_FACTOR = 1.2

# Illumination
CLOUD_ATTENUATION = 0.75

# Flow intensity proxy (soil saturation accumulator)
SOIL_DECAY_BASE = 0.05
SOIL_DECAY_TEMP_COEF = 0.01
SOIL_DECAY_MIN = 0.05
SOIL_DECAY_MAX = 0.35
SOIL_HALF_SATURATION = 25.0  # mm

# Simulation driver
EMA_ALPHA = 0.30
FLOW_TREND_DEAD_BAND = 0.02
PRESSURE_TREND_HOURS = 3

# Defaults substituted for malformed hourly fields
DEFAULT_AIR_TEMPERATURE = 10.0  # °C
DEFAULT_PRESSURE = STANDARD_PRESSURE  # hPa
DEFAULT_WIND_SPEED = 0.0  # km/h
DEFAULT_WIND_DIRECTION = 0.0  # degrees
DEFAULT_PRECIPITATION = 0.0  # mm
DEFAULT_CLOUD_COVER = 0.0  # %
DEFAULT_WEATHER_CODE = 0

# Sync / cache policy
CACHE_SCHEMA_VERSION = 2
THROTTLE_HOURS = 6
INCREMENTAL_THRESHOLD_DAYS = 15
COLD_START_DAYS = 30

DEFAULT_TIMEZONE = "Europe/Paris"
