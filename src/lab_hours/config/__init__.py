import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module, defaulting to development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "lab_hours.config.production"

    if env in {"test", "testing"}:
        return "lab_hours.config.testing"

    return "lab_hours.config.development"


def split_list(value: str) -> list[str]:
    """Split a comma-separated setting into its non-empty, stripped parts."""
    return [part.strip() for part in (value or "").split(",") if part.strip()]
