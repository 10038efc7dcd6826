"""Environment-driven settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from basicbundles.domain import RenderMode, ResourceFlavor

__all__ = ["BundleSettings"]


class BundleSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    render_mode: RenderMode = Field(alias="BASICBUNDLES_RENDER_MODE", default=RenderMode.INDIVIDUAL)
    flavor: ResourceFlavor = Field(alias="BASICBUNDLES_FLAVOR", default=ResourceFlavor.STANDARD)
    minified_marker: str = Field(alias="BASICBUNDLES_MINIFIED_MARKER", default="(.min)")
    minified_suffix: str = Field(alias="BASICBUNDLES_MINIFIED_SUFFIX", default=".min")
    content_root: Path = Field(alias="BASICBUNDLES_CONTENT_ROOT", default=Path("."))
    encoding: str = Field(alias="BASICBUNDLES_ENCODING", default="utf-8")
    cache_max_age: int = Field(alias="BASICBUNDLES_CACHE_MAX_AGE", default=31536000)
    log_level: str = Field(alias="LOG_LEVEL", default="INFO")
    json_logs: bool = Field(alias="BASICBUNDLES_JSON_LOGS", default=False)
