"""Configuration schema using Pydantic.

Single data model and defaults for miru, persisted to ~/.miru/config.json.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, ConfigDict
from pydantic_settings import BaseSettings

TitleLanguage = Literal["main", "english", "japanese", "romaji"]


class BackendConfig(BaseModel):
    """How to reach the backend process."""
    transport: Literal["stdio", "local"] = "stdio"
    command: list[str] = Field(default_factory=list)  # e.g. ["miru-backend", "--stdio"]
    cwd: str | None = None
    env: dict[str, str] = Field(default_factory=dict)
    shutdown_timeout_s: float = 5.0


class BridgeConfig(BaseModel):
    """Command bridge behavior."""
    check_results: bool = True  # Validate success payloads against the declared result type


class DisplayConfig(BaseModel):
    """Display preferences."""
    preferred_title_language: TitleLanguage = "main"

    def preferred_title(self, title: dict[str, Any]) -> str:
        """Pick the preferred title variant, falling back to the main title."""
        main = str(title.get("main") or "")
        if self.preferred_title_language == "main":
            return main
        return str(title.get(self.preferred_title_language) or main)


class LoggingConfig(BaseModel):
    """Log sinks."""
    level: str = "INFO"
    file: bool = True  # Rotating file sink under ~/.miru/logs


class Config(BaseSettings):
    """Root configuration for miru."""
    backend: BackendConfig = Field(default_factory=BackendConfig)
    bridge: BridgeConfig = Field(default_factory=BridgeConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(
        env_prefix="MIRU_",
        env_nested_delimiter="__"
    )
