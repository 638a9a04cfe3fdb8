# config.py
"""
Central configuration file.
"""

# ============================================================
#  API ENDPOINTS
# ============================================================
BASE_URL = "https://countriesnow.space/api/v0.1/countries"

POPULATION_PATH      = "population/q"
CITIES_PATH          = "cities/q"
FLAG_PATH            = "flag/images"
CURRENCY_PATH        = "currency"
DIAL_CODES_PATH      = "codes"
CITY_POPULATION_PATH = "population/cities"

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# ============================================================
#  TRANSPORT
# ============================================================
REQUEST_TIMEOUT = 10.0   # seconds, connect + read
HTTP_RETRIES    = 0      # single-shot; no retry, no backoff
MAX_WORKERS     = 5      # width of the pool used for independent sub-fetches

# ============================================================
#  JOIN POLICY
# ============================================================
# "drop"     → currency rows with no dial code are left out
# "sentinel" → currency rows with no dial code get DIAL_CODE_SENTINEL
JOIN_POLICY        = "drop"
DIAL_CODE_SENTINEL = "N/A"

# ============================================================
#  DEFAULT QUERIES
# ============================================================
DEFAULT_COUNTRY = "Czech Republic"

NEIGHBOR_COUNTRIES = [
    "Czech Republic",
    "Germany",
    "Austria",
    "Slovak Republic",
    "Poland",
]

DEFAULT_CITIES = ["Praha", "Brno", "Ostrava", "Plzen"]

TOP_CITIES_LIMIT = 3

# ============================================================
#  OUTPUT & LOGGING
# ============================================================
OUTPUT_DIR   = "output"
LOG_TO_FILE  = False
LOG_FILE     = "countries_client.log"
LOG_FORMAT   = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FMT = "%Y-%m-%d %H:%M:%S"

# ── Validations ──
assert JOIN_POLICY in ("drop", "sentinel"), (
    f"JOIN_POLICY must be 'drop' or 'sentinel', got {JOIN_POLICY!r}"
)
assert REQUEST_TIMEOUT > 0, "REQUEST_TIMEOUT must be positive"
assert HTTP_RETRIES >= 0, "HTTP_RETRIES cannot be negative"
assert MAX_WORKERS >= 1, "MAX_WORKERS must be at least 1"
