"""
Configuration management for OSS Hunter.

Handles loading configuration from files, environment variables,
and provides sensible defaults.
"""

from pathlib import Path
from typing import Optional
import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScanConfig(BaseModel):
    """General scan settings."""
    level: int = Field(default=2, ge=1, le=3)  # 1=HTTP only, 2=smart, 3=render only
    concurrency: int = Field(default=10, ge=1)
    timeout: float = 6.0  # seconds, shared by fetch and PUT
    user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    verify_tls: bool = False
    follow_redirects: bool = True


class RenderConfig(BaseModel):
    """Headless browser settings."""
    timeout: float = 15.0  # seconds
    headless: bool = True
    browser_args: list[str] = Field(
        default_factory=lambda: ["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"]
    )


class ProbeConfig(BaseModel):
    """Write-probe settings."""
    object_suffix: str = ".ppa"
    payload_bytes: int = Field(default=16, ge=1)
    content_type: str = "application/octet-stream"


class HunterConfig(BaseSettings):
    """Main OSS Hunter configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OSSHUNTER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    scan: ScanConfig = Field(default_factory=ScanConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)

    @classmethod
    def load_from_file(cls, config_path: Path) -> "HunterConfig":
        """Load configuration from a YAML file."""
        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        # Handle nested 'osshunter' key if present
        if "osshunter" in data:
            data = data["osshunter"]

        return cls(**data)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "HunterConfig":
        """
        Load configuration from multiple sources with priority:
        1. Provided config file path
        2. ./osshunter.yaml or ./config/config.yaml
        3. ~/.config/osshunter/config.yaml
        4. Environment variables and defaults
        """
        config_files = [
            config_path,
            Path("./osshunter.yaml"),
            Path("./config/config.yaml"),
            Path.home() / ".config" / "osshunter" / "config.yaml",
        ]

        for path in config_files:
            if path and path.exists():
                return cls.load_from_file(path)

        return cls()

    def save(self, config_path: Path) -> None:
        """Save configuration to a YAML file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(
                {"osshunter": self.model_dump(exclude_none=True)},
                f,
                default_flow_style=False,
                sort_keys=False,
            )


# Default configuration instance
_config: Optional[HunterConfig] = None


def get_config() -> HunterConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = HunterConfig.load()
    return _config


def set_config(config: HunterConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
