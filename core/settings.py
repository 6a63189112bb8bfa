from __future__ import annotations
import os
import yaml
from pathlib import Path
from pydantic import BaseModel

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[1] / "config" / "settings.yaml"

class AppConfig(BaseModel):
    name: str = "TMS"
    title: str = "Training Management System"
    environment: str = "development"

class ApiConfig(BaseModel):
    base_url: str = "http://localhost:5000"
    timeout_seconds: float = 15

class LoggingConfig(BaseModel):
    level: str = "INFO"

class UploadsConfig(BaseModel):
    photo_max_side: int = 512
    import_types: list[str] = ["xlsx", "csv"]

class Settings(BaseModel):
    app: AppConfig = AppConfig()
    api: ApiConfig = ApiConfig()
    logging: LoggingConfig = LoggingConfig()
    uploads: UploadsConfig = UploadsConfig()
    debug: bool = False

def _settings_path() -> Path:
    override = os.getenv("TMS_SETTINGS_PATH", "").strip()
    return Path(override) if override else DEFAULT_SETTINGS_PATH

def load_settings(path: str | Path | None = None) -> Settings:
    with open(path or _settings_path(), "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return Settings(
        app=AppConfig(**(data.get("app") or {})),
        api=ApiConfig(**(data.get("api") or {})),
        logging=LoggingConfig(**(data.get("logging") or {})),
        uploads=UploadsConfig(**(data.get("uploads") or {})),
        debug=bool(data.get("debug", False)),
    )
