import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Thư mục gốc lưu dữ liệu (master_data.json, History, GUQ, ...)
DATA_ROOT = os.getenv("PORTAL_DATA_ROOT", "./ServerLH_Data")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "20"))

DEBUG = True
