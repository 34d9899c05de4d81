"""Application settings read from the ``[custom]`` table of ``domain.toml``."""

from typing import Any

from protean.utils.globals import current_domain


def setting(name: str, default: Any = None) -> Any:
    """Return a custom setting, falling back to ``default`` when unset or blank."""
    value = current_domain.config.get("custom", {}).get(name)
    if value is None or value == "":
        return default
    return value


def int_setting(name: str, default: int) -> int:
    return int(setting(name, default))


def bool_setting(name: str, default: bool = False) -> bool:
    value = setting(name, default)
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def admin_emails() -> list[str]:
    """Recipients for admin alerts (comma separated ``ADMIN_EMAILS``)."""
    raw = setting("ADMIN_EMAILS", "")
    return [email.strip() for email in str(raw).split(",") if email.strip()]


def allowed_origins() -> list[str]:
    """CORS origins (comma separated ``CORS_ORIGINS``); ``*`` when unset."""
    raw = setting("CORS_ORIGINS", "*")
    return [origin.strip() for origin in str(raw).split(",") if origin.strip()]
