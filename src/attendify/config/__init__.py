import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "attendify.config.production"

    if env in {"test", "testing"}:
        return "attendify.config.testing"

    return "attendify.config.development"
