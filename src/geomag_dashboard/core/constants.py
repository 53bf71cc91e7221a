"""
Application-wide constants for the geomagnetic timeseries dashboard.

This module defines default values and constants used throughout the application.
Service-specific constants are defined in their respective modules.
"""

# Default web service root (USGS Geomagnetism Program)
DEFAULT_API_BASE_URL = "https://geomag.usgs.gov/ws"

# Channels shown for a single observatory
DEFAULT_CHANNELS = ["H", "E", "Z", "F"]

# Observatories queried when a single channel is selected
DEFAULT_OBSERVATORIES = [
    "BOU",
    "BRW",
    "BSL",
    "CMO",
    "DED",
    "FRD",
    "FRN",
    "GUA",
    "HON",
    "NEW",
    "SHU",
    "SIT",
    "SJG",
    "TUC",
    "TST",
    "BRT",
    "CMT",
    "DHT",
]

DEFAULT_CHANNEL = "H"
DEFAULT_TIME_MODE = "realtime"

# Time windows (milliseconds)
MINUTE_MS = 60000
REALTIME_WINDOW_MS = 15 * MINUTE_MS  # 15 minutes
PASTDAY_WINDOW_MS = 24 * 60 * MINUTE_MS  # 24 hours
SECONDS_RESOLUTION_MAX_MS = 30 * MINUTE_MS  # request 1s data up to 30 minutes
MAX_CUSTOM_RANGE_MS = 31 * 24 * 60 * MINUTE_MS  # 2,678,400,000 ms

# Rounding applied to the end of live windows (minutes)
REALTIME_ROUND_MINUTES = 1
PASTDAY_ROUND_MINUTES = 5

# Auto-refresh period for live modes
DEFAULT_REFRESH_INTERVAL_MS = 300000  # 5 minutes

# Sampling periods understood by the data service (seconds)
SECOND_SAMPLING_PERIOD = 1
MINUTE_SAMPLING_PERIOD = 60

# User-facing validation messages
ERROR_INVALID_TIME = "Please enter a valid time."
ERROR_TIME_ORDER = "Start Time must come before End Time."
ERROR_TIME_RANGE = "Please select less than 1 month of data."

# Display format for times (UTC, no zone suffix)
DISPLAY_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
