import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "staff_scheduler.config.production"

    if env in {"test", "testing"}:
        return "staff_scheduler.config.testing"

    return "staff_scheduler.config.development"
