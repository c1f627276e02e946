"""Internal constants shared across the library."""

USER_AGENT = "motostock/1.0"

SHEET_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vQKLJLBavG8yW1uZdo1cw_ur0iCPDXBR8KUd8jp4hrRSdHSwXMq2xOCU-pR0_sXznMl990JhV_YRwdr"
    "/pub?gid=0&single=true&output=csv"
)
INSIGHT_WEBHOOK_URL = "https://n8n.dnklabs.xyz/webhook-test/motostock-analyse"
RESTOCK_WEBHOOK_URL = "https://n8n.dnklabs.xyz/webhook/motostock-restock"

# ------------------------------------------------------------------
# Persisted state layout
# ------------------------------------------------------------------

CACHE_DATA_KEY = "motostock_data"
CACHE_LAST_UPDATED_KEY = "motostock_last_updated"

# ------------------------------------------------------------------
# Geography
# ------------------------------------------------------------------

#: Used when a city is missing from the reference table.
FALLBACK_LAT = 20.5937
FALLBACK_LNG = 78.9629

#: Map viewport centre.
MAP_CENTER: tuple[float, float] = (22.5937, 78.9629)

#: Markers whose rounded coordinates collide are spread on a circle of this radius (degrees).
MARKER_OVERLAP_OFFSET = 0.15

# ------------------------------------------------------------------
# Stock bands
# ------------------------------------------------------------------

LOW_STOCK_THRESHOLD = 30
SURPLUS_THRESHOLD = 150
SAFE_STOCK_LEVEL = 50
STOCK_BAR_SCALE = 200
TOP_CRITICAL_COUNT = 5

# ------------------------------------------------------------------
# Refresh scheduling
# ------------------------------------------------------------------

DEFAULT_REFRESH_INTERVAL = 30
MIN_REFRESH_INTERVAL = 10
MAX_REFRESH_INTERVAL = 300
DEFAULT_RESTOCK_DELAY = 2.0
DEFAULT_TOAST_DURATION = 4.0
SETTINGS_TOAST_DURATION = 3.0

#: Filter value meaning "no filter".
ALL = "All"


def validate_refresh_interval(seconds: int) -> int:
    """Return *seconds* if it is an allowed auto-refresh interval.

    Raises :class:`ValueError` outside ``[10, 300]``.
    """
    value = int(seconds)
    if not MIN_REFRESH_INTERVAL <= value <= MAX_REFRESH_INTERVAL:
        raise ValueError(
            f"refresh interval must be between {MIN_REFRESH_INTERVAL} and {MAX_REFRESH_INTERVAL} seconds, got {value}"
        )
    return value
