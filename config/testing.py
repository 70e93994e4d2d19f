import os

SECRET_KEY = "test-secret"

BACKEND_CONFIG = {
    "url": os.getenv("BACKEND_URL", "http://backend.test"),
    "api_key": "test-key",
    "timeout": 5.0,
    "schema": "",
}

LOCAL_TIMEZONE = "Asia/Kuala_Lumpur"
LATE_CUTOFF = "09:30"
ATTENDANCE_SOURCE = "rpc"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
