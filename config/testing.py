import os
import tempfile

SECRET_KEY = "test-secret"

DATA_ROOT = os.getenv("PORTAL_DATA_ROOT", os.path.join(tempfile.gettempdir(), "logistics_portal_test"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
MAX_UPLOAD_MB = 5

DEBUG = False
TESTING = True
