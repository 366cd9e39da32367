from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WC_",
    )

    # Demo projection
    projection_seed: int = 42
    projection_path_count: int = 5000
    projection_start_value: float = 50000.0
    projection_monthly_surplus_mean: float = 85.0
    projection_monthly_surplus_std: float = 70.0
    projection_annual_return_mean: float = 0.072
    projection_annual_return_volatility: float = 0.15
    projection_seeding: str = "stream"  # stream | replay | offset

    # Calendar conversions
    days_per_month: int = 30
    days_per_year: int = 365
    trading_days_per_year: int = 252

    # Request limits
    projection_max_years: int = 30
    # path_count * (horizon_days + 1); covers the demo at projection_max_years
    projection_max_path_days: int = 60_000_000

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = ["http://localhost:3000"]

    # Logging
    log_dir: str = "logs"  # empty disables the rotating file handler
