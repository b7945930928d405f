# File: /adminview/core/config.py | Version: 1.3 | Title: Central App Settings (Pydantic v2)
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- Database (reference catalog backend) ---
    DATABASE_URL: str = "sqlite:///./adminview.db"

    # --- Catalog backend (layout + data endpoints) ---
    CATALOG_API_URL: str = "http://localhost:8000"
    CATALOG_API_TIMEOUT_SECONDS: float = 30.0

    # --- Table / paging ---
    PAGE_SIZE: int = 20

    # --- Open view sessions (in-memory) ---
    SESSION_MAX_OPEN: int = 1000  # least recently used session is evicted beyond this
    SESSION_IDLE_TTL_SECONDS: float = 1800.0  # untouched this long → evicted; 0 disables
    FLEX_WIDTH_THRESHOLD: int = 1000  # sum of min widths below this → first column flexes

    # --- API behavior toggles ---
    FILTER_AUTO_APPLY: bool = True  # re-query after every filter edit
    ENABLE_CATALOG_API: bool = True  # mount the reference /t/... endpoints
    ENABLE_STD_ERRORS: bool = (
        False  # set True in .env to enable standardized error responses
    )

    # v2-style config
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
