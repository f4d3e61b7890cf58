import os

_ALIASES = {
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
}


def get_settings_module() -> str:
    """Tên module cấu hình theo biến APP_ENV; mặc định là development.

    Ví dụ: APP_ENV=prod -> "config.production".
    """
    env = os.getenv("APP_ENV", "development").strip().lower()
    return f"config.{_ALIASES.get(env, 'development')}"
