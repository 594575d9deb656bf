"""
Application configuration settings.
Handles environment variables and application-wide settings.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application settings
    app_name: str = Field(default="Sabri Jewelry Admin API", validation_alias="APP_NAME")
    app_version: str = Field(default="1.0.0", validation_alias="APP_VERSION")
    app_description: str = Field(
        default="Admin dashboard API for the Sabri jewelry store: catalog, orders, coupons, shipping, customers, reviews and analytics",
        validation_alias="APP_DESCRIPTION"
    )
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # Server settings
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")
    reload: bool = Field(default=False, validation_alias="RELOAD")

    # Database settings
    mongodb_url: str = Field(default="mongodb://localhost:27017", validation_alias="MONGODB_URL")
    database_name: str = Field(default="sabri_jewelry", validation_alias="DATABASE_NAME")

    # MongoDB connection settings
    server_selection_timeout_ms: int = Field(default=5000, validation_alias="MONGODB_SERVER_SELECTION_TIMEOUT_MS")
    connect_timeout_ms: int = Field(default=5000, validation_alias="MONGODB_CONNECT_TIMEOUT_MS")
    socket_timeout_ms: int = Field(default=30000, validation_alias="MONGODB_SOCKET_TIMEOUT_MS")
    max_pool_size: int = Field(default=10, validation_alias="MONGODB_MAX_POOL_SIZE")
    min_pool_size: int = Field(default=1, validation_alias="MONGODB_MIN_POOL_SIZE")
    retry_writes: bool = Field(default=True, validation_alias="MONGODB_RETRY_WRITES")

    # Logging settings
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # API settings
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")
    admin_api_key: str = Field(default="", validation_alias="ADMIN_API_KEY")

    # Rate limiting (requests per window, window in seconds)
    api_rate_limit: int = Field(default=100, validation_alias="API_RATE_LIMIT")
    api_rate_window_seconds: int = Field(default=60, validation_alias="API_RATE_WINDOW_SECONDS")
    strict_rate_limit: int = Field(default=20, validation_alias="STRICT_RATE_LIMIT")
    strict_rate_window_seconds: int = Field(default=60, validation_alias="STRICT_RATE_WINDOW_SECONDS")

    # Pagination defaults
    max_page_size: int = Field(default=1000, validation_alias="MAX_PAGE_SIZE")

    # Business logic settings
    default_brand: str = Field(default="Sabri", validation_alias="DEFAULT_BRAND")
    low_stock_threshold: int = Field(default=10, validation_alias="LOW_STOCK_THRESHOLD")
    max_csv_upload_bytes: int = Field(default=5 * 1024 * 1024, validation_alias="MAX_CSV_UPLOAD_BYTES")

    # Admin bootstrap
    admin_email: str = Field(default="admin@sabri.com", validation_alias="ADMIN_EMAIL")
    admin_password: str = Field(default="admin123", validation_alias="ADMIN_PASSWORD")


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
