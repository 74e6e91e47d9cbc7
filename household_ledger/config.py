"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./household_ledger.db"

    # Service
    service_name: str = "household-ledger"
    log_level: str = "INFO"

    # Budgets and reports
    budget_warning_threshold: float = 80.0  # percent used before a budget is flagged
    trend_months: int = 6
    recent_expenses_limit: int = 5
    default_lookback_days: int = 30


settings = Settings()
