import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

BACKEND_CONFIG = {
    "url": os.getenv("BACKEND_URL", "http://localhost:54321"),
    "api_key": os.getenv("BACKEND_API_KEY", ""),
    "timeout": float(os.getenv("BACKEND_TIMEOUT", "15")),
    "schema": os.getenv("BACKEND_SCHEMA", ""),
}

# Day boundaries and lateness are computed in this zone.
LOCAL_TIMEZONE = os.getenv("LOCAL_TIMEZONE", "Asia/Kuala_Lumpur")
LATE_CUTOFF = os.getenv("LATE_CUTOFF", "09:30")
# "rpc" reads month_print_report, "events" rebuilds days from raw check-in/out rows.
ATTENDANCE_SOURCE = os.getenv("ATTENDANCE_SOURCE", "rpc")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
