"""
Application constants
"""

# Clock arithmetic
MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * 60
FALLBACK_DURATION_MINUTES = 60  # used when an edited task spans zero minutes
FALLBACK_END_TIME = "10:00"  # end time when no start time is known

# Task store API
TASKS_ENDPOINT = "tasks"

# Retry configuration
MAX_RETRIES = 3
RETRY_DELAY = 1  # seconds

# Time series
DEFAULT_SERIES_DAYS = 14  # trailing window for "all" and incomplete custom ranges

# Chart geometry (line chart)
CHART_WIDTH = 660
CHART_HEIGHT = 240
CHART_PADDING = 32
CHART_MIN_SCALE = 5
CHART_TICK_STEPS = 4
FORECAST_BAND_SIZE = 3

# Chart geometry (status donut)
PIE_RADIUS = 92

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
