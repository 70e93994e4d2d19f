import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

BACKEND_CONFIG = {
    "url": os.getenv("BACKEND_URL", ""),
    "api_key": os.getenv("BACKEND_API_KEY", ""),
    "timeout": float(os.getenv("BACKEND_TIMEOUT", "15")),
    "schema": os.getenv("BACKEND_SCHEMA", ""),
}

LOCAL_TIMEZONE = os.getenv("LOCAL_TIMEZONE", "Asia/Kuala_Lumpur")
LATE_CUTOFF = os.getenv("LATE_CUTOFF", "09:30")
ATTENDANCE_SOURCE = os.getenv("ATTENDANCE_SOURCE", "rpc")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
