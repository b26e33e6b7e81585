import os

# Basic settings helper to read environment configuration.


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_float(val: str | None, default: float) -> float:
    if val is None or not val.strip():
        return default
    return float(val)


def _as_int(val: str | None, default: int) -> int:
    if val is None or not val.strip():
        return default
    return int(val)


class Settings:
    def __init__(self) -> None:
        self.GEOAPIFY_API_KEY: str | None = os.getenv("GEOAPIFY_API_KEY") or None
        self.GEOAPIFY_BASE_URL: str = os.getenv("GEOAPIFY_BASE_URL", "https://api.geoapify.com").rstrip("/")
        self.SEARCH_RADIUS_KM: float = _as_float(os.getenv("SEARCH_RADIUS_KM"), 5.0)
        self.SEARCH_RESULT_LIMIT: int = _as_int(os.getenv("SEARCH_RESULT_LIMIT"), 20)
        self.PROVIDER_TIMEOUT_SECONDS: float = _as_float(os.getenv("PROVIDER_TIMEOUT_SECONDS"), 10.0)
        self.MIN_POSTCODE_LENGTH: int = _as_int(os.getenv("MIN_POSTCODE_LENGTH"), 3)
        self.LOG_PROVIDER_URLS: bool = _as_bool(os.getenv("LOG_PROVIDER_URLS"), False)


settings = Settings()
