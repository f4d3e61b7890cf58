import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DATA_ROOT = os.getenv("PORTAL_DATA_ROOT", "./ServerLH_Data")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "20"))

DEBUG = False
