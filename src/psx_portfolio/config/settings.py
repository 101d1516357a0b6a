"""Application settings and configuration."""

from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from psx_portfolio.domain.models import InvestedAmountPolicy


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".psx-portfolio"


class Settings(BaseSettings):
    """Application configuration loaded from PSX_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PSX_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "PSX Portfolio Tracker"
    app_version: str = "0.1.0"

    # Data directory (SQLite database lives here unless database_url is set)
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # HTTP server
    host: str = "127.0.0.1"
    port: int = 8001

    # Charge schedule (see services.charges.ChargeSchedule)
    commission_threshold: Decimal = Decimal("33.33")
    commission_rate: Decimal = Decimal("0.0015")
    commission_per_share: Decimal = Decimal("0.05")
    sales_tax_rate: Decimal = Decimal("0.15")
    depository_fee_per_share: Decimal = Decimal("0.005")

    invested_amount_policy: InvestedAmountPolicy = InvestedAmountPolicy.RETAIN

    # Transaction listing
    default_page_size: int = 50
    max_page_size: int = 500

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "portfolio.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
