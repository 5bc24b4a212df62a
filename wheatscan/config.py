from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present (local dev only)
load_dotenv()


def _default_capture_dir() -> Path:
    return Path.home() / ".wheatscan" / "pictures"


class Settings(BaseSettings):
    """Client configuration loaded from WHEATSCAN_* environment variables or .env file."""

    # Inference endpoint
    api_base_url: str = Field(
        "https://talha-xyz32-wheatdiseasediagnoses.hf.space/",
        description="Base URL of the classification service.",
    )
    api_predict_path: str = Field("predict", description="Path of the upload endpoint, relative to the base URL.")
    api_label_field: str = Field("prediction", description="JSON field holding the predicted label.")
    request_timeout: float = Field(10.0, gt=0, description="HTTP timeout in seconds.")

    # Image handling
    preview_max_dim: int = Field(1024, ge=1, description="Bounding box (pixels) for preview/display decoding.")
    capture_dir: Path = Field(default_factory=_default_capture_dir, description="App-private directory for captures.")

    # Host programs (desktop platform)
    camera_command: Optional[str] = Field(
        default=None,
        description="Camera program; '{output}' is replaced with the destination file, e.g. 'libcamera-still -n -o {output}'.",
    )
    picker_command: Optional[str] = Field(
        default="zenity --file-selection --title=Select-wheat-photo",
        description="Photo picker program; must print the chosen path or URI on stdout.",
    )
    wifi_settings_command: Optional[str] = Field("nm-connection-editor")
    mobile_data_settings_command: Optional[str] = Field("gnome-control-center wwan")
    app_settings_command: Optional[str] = Field("gnome-control-center privacy")

    # Connectivity probe
    connectivity_probe_host: str = Field("1.1.1.1")
    connectivity_probe_port: int = Field(53, ge=1, le=65535)
    connectivity_probe_timeout: float = Field(3.0, gt=0)

    # Presentation
    search_url_template: str = Field("https://www.google.com/search?q={query}")

    platform: str = Field("desktop", description="Platform adapter name.")
    log_level: str = Field("INFO")

    model_config = SettingsConfigDict(env_prefix="WHEATSCAN_", env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def predict_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/{self.api_predict_path.lstrip('/')}"


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
