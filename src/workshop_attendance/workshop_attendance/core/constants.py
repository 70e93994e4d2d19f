"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LOCAL_TIMEZONE = "Asia/Kuala_Lumpur"
DEFAULT_LATE_CUTOFF = "09:30"
DEFAULT_BACKEND_TIMEOUT_SECONDS = 15
PRINT_PAGE_SIZE = 3
PENDING_PLACEHOLDER = "—"
