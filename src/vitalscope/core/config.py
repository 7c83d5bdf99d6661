"""Configuration for vitalscope.

Values are read from VITALSCOPE_* environment variables, e.g.
VITALSCOPE_CRUX_API_KEY or VITALSCOPE_FIELD_ENABLED=false.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CRUX_API_URL = "https://chromeuxreport.googleapis.com/v1/records:queryRecord"
DEFAULT_PSI_URL = "https://developers.google.com/speed/pagespeed/insights/"


class Settings(BaseSettings):
    """Runtime settings."""

    model_config = SettingsConfigDict(env_prefix="VITALSCOPE_")

    # Remote field data
    field_enabled: bool = Field(
        default=True,
        description="Query the remote distribution service for origin field data",
    )
    crux_api_key: str = Field(default="", description="CrUX API key")
    crux_api_url: str = Field(default=DEFAULT_CRUX_API_URL, description="CrUX queryRecord endpoint")
    form_factor: str = Field(default="DESKTOP", description="CrUX form factor to query")
    request_timeout: float = Field(default=10.0, gt=0, description="Remote request timeout (s)")

    # Presentation
    psi_url: str = Field(default=DEFAULT_PSI_URL, description="PageSpeed Insights front end")

    # Local metrics cache
    db_path: Path = Field(default=Path("data/vitalscope.db"), description="SQLite cache file")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings (read from the environment once)."""
    return Settings()
